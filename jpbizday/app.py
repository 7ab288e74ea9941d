"""Main Textual application."""

from datetime import MAXYEAR, MINYEAR, date
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.widgets import Footer, Header, LoadingIndicator

from jpbizday.config import Config
from jpbizday.errors import HolidayDataUnavailableError, UserFacingError
from jpbizday.export import build_calendar_script, calendar_events
from jpbizday.models import ComputedDates, DayRecord
from jpbizday.service import BusinessDayService, LoadState, default_month, parse_month_input
from jpbizday.widgets import CalendarTable, ResultPanel
from jpbizday.widgets.month_dialog import MonthDialog


class JpbizdayApp(App):
    """Business day TUI application."""

    CSS = """
    #main-container {
        height: 100%;
    }

    Vertical {
        height: 100%;
    }

    #loading-indicator {
        layer: overlay;
        offset: 50% 50%;
        width: auto;
        height: auto;
        display: none;
    }

    #loading-indicator.visible {
        display: block;
    }

    #result-panel {
        height: 1fr;
        padding: 1;
        background: $panel;
        border: solid $primary;
    }

    #result-row {
        height: 100%;
        width: 100%;
    }

    .result-box {
        width: 1fr;
        padding: 0 1;
    }

    #calendar-table {
        height: 4fr;
        border: solid $primary;
        width: 100%;
    }
    """

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("q", "quit", "Quit"),
        ("m", "select_month", "Select Month"),
        ("n", "next_month", "Next Month"),
        ("b", "prev_month", "Prev Month"),
        ("d", "default_month", "Default Month"),
        ("e", "export", "Copy Calendar Script"),
        ("?", "help", "Help"),
    ]

    def __init__(self, config: Config | None = None, today: date | None = None) -> None:
        super().__init__()
        self.config = config or Config()
        self.today = today or date.today()
        self.service = BusinessDayService(self.config, self.today)
        self.current_year, self.current_month = default_month(self.today)
        self.computed: ComputedDates | None = None

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(show_clock=True)
        with Container(id="main-container"), Vertical():
            yield LoadingIndicator(id="loading-indicator")
            yield ResultPanel(id="result-panel")
            yield CalendarTable(id="calendar-table")
        yield Footer()

    def on_mount(self) -> None:
        """Load holiday data when the app starts."""
        self._update_title()
        self._show_loading()
        self.run_worker(self._load_and_compute, exclusive=True, thread=True)

    def _update_title(self) -> None:
        self.title = f"jpbizday - {self.current_year}/{self.current_month:02d}"

    def _show_loading(self) -> None:
        loading = self.query_one("#loading-indicator", LoadingIndicator)
        loading.add_class("visible")

    def _hide_loading(self) -> None:
        loading = self.query_one("#loading-indicator", LoadingIndicator)
        loading.remove_class("visible")

    def _load_and_compute(self) -> None:
        """One-time holiday data load, then the first computation."""
        try:
            self.service.load()
        except HolidayDataUnavailableError as e:
            self.call_from_thread(self._show_failure, e.message.value, True)
            return
        self._compute()

    def _compute(self) -> None:
        """Compute dates for the current month (worker thread)."""
        year, month = self.current_year, self.current_month
        try:
            computed = self.service.compute(year, month)
        except UserFacingError as e:
            self.call_from_thread(self._show_failure, e.message.value, False)
            return
        records = self.service.month_calendar(year, month)
        self.call_from_thread(self._update_ui, computed, records)

    def compute_async(self) -> None:
        """Start computing the current month, unless holiday data is unavailable."""
        self._update_title()
        if self.service.state == LoadState.FAILED:
            self._show_failure(HolidayDataUnavailableError().message.value, True)
            return
        if self.service.state == LoadState.PENDING:
            # The load worker computes once it has finished
            return
        self._show_loading()
        self.run_worker(self._compute, exclusive=True, thread=True)

    def _update_ui(self, computed: ComputedDates, records: list[DayRecord]) -> None:
        """Update UI components (must run on main thread)."""
        self.computed = computed
        self.query_one("#result-panel", ResultPanel).show_dates(computed)
        calendar_table = self.query_one("#calendar-table", CalendarTable)
        calendar_table.load_records(records, computed)
        self._hide_loading()
        calendar_table.focus()

    def _show_failure(self, message: str, fatal: bool) -> None:
        """Clear the previous result and show one message (must run on main thread)."""
        self.computed = None
        self.query_one("#result-panel", ResultPanel).show_message(message, error=fatal)
        self.query_one("#calendar-table", CalendarTable).clear()
        self._hide_loading()

    def _move_month(self, delta: int) -> None:
        index = self.current_year * 12 + (self.current_month - 1) + delta
        year, month = divmod(index, 12)
        if not MINYEAR <= year <= MAXYEAR:
            return
        self.current_year, self.current_month = year, month + 1
        self.compute_async()

    def action_next_month(self) -> None:
        """Navigate to next month."""
        self._move_month(1)

    def action_prev_month(self) -> None:
        """Navigate to previous month."""
        self._move_month(-1)

    def action_default_month(self) -> None:
        """Navigate to the month after today."""
        self.current_year, self.current_month = default_month(self.today)
        self.compute_async()

    def action_select_month(self) -> None:
        """Open the month picker."""
        initial = f"{self.current_year:04d}-{self.current_month:02d}"
        self.push_screen(MonthDialog(initial), self.handle_month_result)

    def handle_month_result(self, result: str | None) -> None:
        """Handle the text returned by the month picker."""
        if result is None:
            return
        try:
            self.current_year, self.current_month = parse_month_input(result)
        except UserFacingError as e:
            self._show_failure(e.message.value, False)
            return
        self.compute_async()

    def action_export(self) -> None:
        """Copy the Calendar.app script for the current result to the clipboard."""
        if self.computed is None:
            self.notify("Nothing to export", severity="warning")
            return
        events = calendar_events(self.computed, self.config.labels)
        if not events:
            self.notify("No calendar labels configured", severity="warning")
            return
        self.copy_to_clipboard(build_calendar_script(events))
        self.notify(f"Calendar script for {len(events)} event(s) copied", severity="information")

    def action_help(self) -> None:
        """Show help message."""
        help_text = """
        [bold]jpbizday - Keyboard Shortcuts[/bold]

        [cyan]m[/cyan] - Select month (YYYY-MM)
        [cyan]n[/cyan] / [cyan]b[/cyan] - Next / previous month
        [cyan]d[/cyan] - Month after today
        [cyan]e[/cyan] - Copy Calendar.app script
        [cyan]q[/cyan] - Quit application

        [bold]Business day:[/bold] Monday to Friday, not a Japanese public holiday
        """
        self.notify(help_text, title="Help", timeout=10)
