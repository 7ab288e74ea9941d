"""Result panel widget showing the selected business days."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Static

from jpbizday.models import FIELD_TITLES, ComputedDates, format_plain_date


class ResultPanel(Container):
    """Panel displaying the computed dates, or a single message."""

    def compose(self) -> ComposeResult:
        """Compose the result panel."""
        with Horizontal(id="result-row"):
            with Vertical(classes="result-box"):
                yield Static("Loading holiday data...", id="result-second")
                yield Static("", id="result-third")
                yield Static("", id="result-second_from_three")
            with Vertical(classes="result-box"):
                yield Static("", id="result-second_from_eight")
                yield Static("", id="result-second_from_twelve")
            with Vertical(classes="result-box"):
                yield Static("", id="result-second_from_twenty_six")
                yield Static("", id="result-fifth_from_twenty_six")

    def show_dates(self, dates: ComputedDates) -> None:
        """Display the computed dates."""
        for name, value in dates.items():
            self.query_one(f"#result-{name}", Static).update(
                f"[bold]{FIELD_TITLES[name]}:[/bold] {format_plain_date(value)}"
            )
        self.refresh()

    def show_message(self, message: str, error: bool = False) -> None:
        """Clear any previous result and display a message."""
        for name in FIELD_TITLES:
            self.query_one(f"#result-{name}", Static).update("")
        text = f"[red]{message}[/red]" if error else message
        self.query_one("#result-second", Static).update(text)
        self.refresh()
