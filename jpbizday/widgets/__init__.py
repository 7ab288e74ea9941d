"""Textual widgets for the TUI."""

from jpbizday.widgets.calendar_table import CalendarTable
from jpbizday.widgets.result_panel import ResultPanel

__all__ = ["CalendarTable", "ResultPanel"]
