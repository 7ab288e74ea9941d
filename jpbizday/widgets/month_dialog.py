"""Dialog for picking a month."""

from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class MonthDialog(ModalScreen):
    """Modal dialog returning the raw ``YYYY-MM`` text, or None when cancelled."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("escape", "dismiss", "Cancel"),
    ]

    CSS = """
    MonthDialog {
        align: center middle;
    }

    #month-dialog {
        width: 36;
        height: auto;
        border: thick $primary;
        padding: 1 2;
    }

    #month-buttons {
        height: auto;
    }
    """

    def __init__(self, initial_value: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.initial_value = initial_value

    def compose(self) -> ComposeResult:
        with Vertical(id="month-dialog"):
            yield Label("Year-month (YYYY-MM)")
            yield Input(value=self.initial_value, placeholder="2025-01", id="month-input")
            with Horizontal(id="month-buttons"):
                yield Button("Show", id="show-button", variant="primary")
                yield Button("Cancel", id="cancel-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "show-button":
            self.dismiss(self.query_one("#month-input", Input).value)
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Submit on Enter."""
        self.dismiss(event.value)
