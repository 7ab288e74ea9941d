"""Calendar table widget showing the days of a month."""

from datetime import date as date_type

from rich.text import Text
from textual.widgets import DataTable

from jpbizday.models import ComputedDates, DayRecord, DayType


class CalendarTable(DataTable):
    """Table displaying the month with business days and holidays."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.show_cursor = True
        self.zebra_stripes = True
        self.can_focus = True

    def on_mount(self) -> None:
        """Set up the table columns."""
        # Date format is "MM/DD (Day)" = 13 chars
        self.add_column("Date", width=13)
        self.add_column("#", width=4)
        self.add_column("Type", width=14)
        self.add_column("Note")

    def load_records(
        self, records: list[DayRecord], selected: ComputedDates | None = None
    ) -> None:
        """Load day records into the table, marking the selected dates."""
        self.clear()
        selected_by_date: dict[date_type, list[str]] = {}
        if selected is not None:
            for name, value in selected.items():
                selected_by_date.setdefault(value, []).append(name)

        business_day_index = 0
        for record in records:
            date_str = record.date.strftime("%m/%d")
            day_name = record.date.strftime("(%a)")[0:5]
            date_display = f"{date_str} {day_name}"

            if record.is_business_day:
                business_day_index += 1
                index_str = str(business_day_index)
            else:
                index_str = ""

            notes = []
            if record.holiday_name:
                notes.append(record.holiday_name)
            notes.extend(selected_by_date.get(record.date, []))
            note = " | ".join(notes)

            if record.date in selected_by_date:
                style = "bold yellow"
            elif record.day_type == DayType.WEEKEND:
                style = "blue"
            elif record.day_type == DayType.HOLIDAY:
                style = "red"
            else:
                style = None

            type_str = record.day_type.value.replace("_", " ")
            if style:
                self.add_row(
                    Text(date_display, style=style),
                    Text(index_str, style=style),
                    Text(type_str, style=style),
                    Text(note, style=style),
                    key=record.date.isoformat(),
                )
            else:
                self.add_row(
                    date_display, index_str, type_str, note, key=record.date.isoformat()
                )
