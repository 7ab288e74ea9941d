"""Tests for the Calendar.app script export."""

from datetime import date

from jpbizday.export import (
    SCRIPT_EDITOR_URL,
    applescript_url,
    build_calendar_script,
    calendar_events,
)
from jpbizday.models import ComputedDates

DATES = ComputedDates(
    second=date(2024, 1, 3),
    third=date(2024, 1, 4),
    second_from_three=date(2024, 1, 4),
    second_from_eight=date(2024, 1, 10),
    second_from_twelve=date(2024, 1, 15),
    second_from_twenty_six=date(2024, 1, 29),
    fifth_from_twenty_six=date(2024, 2, 1),
)


def test_calendar_events_follow_labels():
    """Only labelled dates become events, in field order."""
    labels = {"fifth_from_twenty_six": "Transfer", "second": "Sell", "third": ""}

    assert calendar_events(DATES, labels) == [
        ("Sell", date(2024, 1, 3)),
        ("Transfer", date(2024, 2, 1)),
    ]


def test_build_calendar_script():
    """Test the generated AppleScript."""
    script = build_calendar_script([("Sell", date(2024, 1, 3)), ("Transfer", date(2024, 2, 1))])

    assert script.startswith('tell application "Calendar"')
    assert script.endswith("end tell")
    assert script.count("make new event") == 2
    assert "    set year of theDate to 2024" in script
    assert "    set month of theDate to January" in script
    assert "    set month of theDate to February" in script
    assert "    set day of theDate to 3" in script
    assert "    set time of theDate to (8 * hours)" in script
    assert "    set time of theEndDate to (12 * hours)" in script
    assert '{summary:"Sell", start date:theDate, end date:theEndDate}' in script


def test_build_calendar_script_escapes_quotes():
    """Quotes in a label do not break the script."""
    script = build_calendar_script([('Say "hi"', date(2024, 1, 3))])
    assert 'summary:"Say \\"hi\\""' in script


def test_build_calendar_script_empty():
    """No events still yields a valid script."""
    script = build_calendar_script([])
    assert "make new event" not in script
    assert script.splitlines() == [
        'tell application "Calendar"',
        "  activate",
        "  tell calendar 1",
        "  end tell",
        "end tell",
    ]


def test_applescript_url():
    """The script is URI-encoded like encodeURIComponent."""
    url = applescript_url('tell application "Calendar" (x)')

    assert url.startswith(SCRIPT_EDITOR_URL)
    assert url.removeprefix(SCRIPT_EDITOR_URL) == "tell%20application%20%22Calendar%22%20(x)"


def test_applescript_url_encodes_unicode():
    """Non-ASCII labels are percent-encoded as UTF-8."""
    url = applescript_url("売却")
    assert url.removeprefix(SCRIPT_EDITOR_URL) == "%E5%A3%B2%E5%8D%B4"
