"""Calendar.app automation script for computed dates."""

from datetime import date
from urllib.parse import quote

from jpbizday.models import ComputedDates

# AppleScript month constants, independent of the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
SCRIPT_EDITOR_URL = "applescript://com.apple.scripteditor?action=new&script="
# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def calendar_events(dates: ComputedDates, labels: dict[str, str]) -> list[tuple[str, date]]:
    """(label, date) pairs for the labelled fields, in field order."""
    return [(labels[name], value) for name, value in dates.items() if labels.get(name)]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _event_block(summary: str, event_date: date, start_hour: int, end_hour: int) -> str:
    return "\n".join(
        [
            "    set theDate to current date",
            f"    set year of theDate to {event_date.year}",
            f"    set month of theDate to {MONTH_NAMES[event_date.month - 1]}",
            f"    set day of theDate to {event_date.day}",
            f"    set time of theDate to ({start_hour} * hours)",
            "    copy theDate to theEndDate",
            f"    set time of theEndDate to ({end_hour} * hours)",
            f'    make new event with properties {{summary:"{_escape(summary)}", '
            "start date:theDate, end date:theEndDate}",
        ]
    )


def build_calendar_script(
    events: list[tuple[str, date]], start_hour: int = 8, end_hour: int = 12
) -> str:
    """AppleScript creating one Calendar event per (summary, date) pair."""
    body = "\n\n".join(
        _event_block(summary, event_date, start_hour, end_hour) for summary, event_date in events
    )
    lines = ['tell application "Calendar"', "  activate", "  tell calendar 1"]
    if body:
        lines.append(body)
    lines += ["  end tell", "end tell"]
    return "\n".join(lines)


def applescript_url(script: str) -> str:
    """URL that opens the script in Script Editor."""
    return SCRIPT_EDITOR_URL + quote(script, safe=_URI_COMPONENT_SAFE)
