"""Tests for business day selection and the readiness gate."""

from datetime import date

import pytest

from conftest import FixedHolidayCalendar, date_range
from jpbizday.calculator import BusinessDayFinder
from jpbizday.config import Config
from jpbizday.errors import (
    HolidayDataUnavailableError,
    InsufficientBusinessDaysError,
    InvalidInputError,
    SearchExhaustedError,
)
from jpbizday.messages import Message
from jpbizday.models import ComputedDates
from jpbizday.service import (
    BusinessDayService,
    LoadState,
    default_month,
    parse_month_input,
    select_dates,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-01", (2024, 1)),
        ("2024-1", (2024, 1)),
        ("2024/12", (2024, 12)),
        (" 2025-05 ", (2025, 5)),
    ],
)
def test_parse_month_input(text, expected):
    """Test parsing year-month input."""
    assert parse_month_input(text) == expected


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_month_input_empty(text):
    """Missing input has its own message."""
    with pytest.raises(InvalidInputError) as exc_info:
        parse_month_input(text)
    assert exc_info.value.message == Message.EMPTY_INPUT


@pytest.mark.parametrize("text", ["abc", "2024", "2024-13", "2024-00", "24-01", "2024-01-05"])
def test_parse_month_input_unparseable(text):
    """Malformed input has its own message."""
    with pytest.raises(InvalidInputError) as exc_info:
        parse_month_input(text)
    assert exc_info.value.message == Message.UNPARSEABLE_INPUT


def test_default_month():
    """The default month is the month after today."""
    assert default_month(date(2024, 5, 31)) == (2024, 6)
    assert default_month(date(2024, 12, 15)) == (2025, 1)


def test_select_dates_january_2024(finder):
    """Test the full selection for January 2024."""
    dates = select_dates(finder, 2024, 1)

    assert dates == ComputedDates(
        second=date(2024, 1, 3),
        third=date(2024, 1, 4),
        second_from_three=date(2024, 1, 4),
        second_from_eight=date(2024, 1, 10),
        second_from_twelve=date(2024, 1, 15),
        second_from_twenty_six=date(2024, 1, 29),
        fifth_from_twenty_six=date(2024, 2, 1),
    )


def test_select_dates_golden_week(finder):
    """May 2024: Golden Week holidays are skipped."""
    dates = select_dates(finder, 2024, 5)

    # May 1-2 are business days, May 3-6 are holidays or weekend
    assert dates.second == date(2024, 5, 2)
    assert dates.third == date(2024, 5, 7)
    assert dates.second_from_three == date(2024, 5, 8)


def _finder_with_holidays(start: date, end: date, **kwargs) -> BusinessDayFinder:
    return BusinessDayFinder(FixedHolidayCalendar(date_range(start, end)), **kwargs)


def test_fewer_than_three_business_days():
    """Only two business days in the month."""
    finder = _finder_with_holidays(date(2024, 1, 3), date(2024, 1, 31))
    with pytest.raises(InsufficientBusinessDaysError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.FEWER_THAN_THREE


def test_fewer_than_two_from_three():
    """Only Jan 3 remains from the 3rd onwards."""
    finder = _finder_with_holidays(date(2024, 1, 4), date(2024, 1, 31))
    with pytest.raises(InsufficientBusinessDaysError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.FEWER_THAN_TWO_FROM_THREE


def test_fewer_than_two_from_eight():
    """Only Jan 8 remains from the 8th onwards."""
    finder = _finder_with_holidays(date(2024, 1, 9), date(2024, 1, 31))
    with pytest.raises(InsufficientBusinessDaysError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.FEWER_THAN_TWO_FROM_EIGHT


def test_fewer_than_two_from_twelve():
    """Only Jan 12 remains from the 12th onwards."""
    finder = _finder_with_holidays(date(2024, 1, 13), date(2024, 1, 31))
    with pytest.raises(InsufficientBusinessDaysError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.FEWER_THAN_TWO_FROM_TWELVE


def test_fewer_than_two_from_twenty_six():
    """Only Jan 26 remains from the 26th onwards."""
    finder = _finder_with_holidays(date(2024, 1, 27), date(2024, 1, 31))
    with pytest.raises(InsufficientBusinessDaysError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.FEWER_THAN_TWO_FROM_TWENTY_SIX


def test_fifth_from_twenty_six_not_found(calendar):
    """A short scan window cannot reach the 5th business day."""
    finder = BusinessDayFinder(calendar, max_scan_days=4)
    with pytest.raises(SearchExhaustedError) as exc_info:
        select_dates(finder, 2024, 1)
    assert exc_info.value.message == Message.SEARCH_EXHAUSTED


def test_service_requires_load():
    """Queries before the holiday data is loaded are refused."""
    service = BusinessDayService(Config(), today=date(2024, 1, 1))
    assert service.state == LoadState.PENDING
    with pytest.raises(HolidayDataUnavailableError):
        service.compute(2024, 1)


def test_service_compute():
    """Test computing after a successful load."""
    service = BusinessDayService(Config(), today=date(2024, 1, 1))
    service.load()

    assert service.state == LoadState.READY
    year, month, dates = service.compute_from_input("2024-01")
    assert (year, month) == (2024, 1)
    assert dates.third == date(2024, 1, 4)
    assert len(service.month_calendar(2024, 1)) == 31


def test_service_uses_configured_scan_window():
    """max_scan_days from the config reaches the finder."""
    service = BusinessDayService(Config(max_scan_days=4), today=date(2024, 1, 1))
    service.load()
    assert service.finder.max_scan_days == 4
    with pytest.raises(SearchExhaustedError):
        service.compute(2024, 1)


def test_service_jpholiday_source():
    """The jpholiday source gives the same result as the rules."""
    rules = BusinessDayService(Config(holiday_source="rules"), today=date(2024, 1, 1))
    library = BusinessDayService(Config(holiday_source="jpholiday"), today=date(2024, 1, 1))
    rules.load()
    library.load()
    assert rules.compute(2024, 1) == library.compute(2024, 1)


def test_service_load_failure_is_final(monkeypatch):
    """A failed load disables every later query."""

    def failing_calendar(holiday_source):
        raise OSError("network unreachable")

    monkeypatch.setattr("jpbizday.service.build_calendar", failing_calendar)
    service = BusinessDayService(Config(), today=date(2024, 1, 1))

    with pytest.raises(HolidayDataUnavailableError) as exc_info:
        service.load()
    assert exc_info.value.message == Message.HOLIDAY_DATA_UNAVAILABLE
    assert service.state == LoadState.FAILED

    # No retry
    service.load()
    assert service.state == LoadState.FAILED
    with pytest.raises(HolidayDataUnavailableError):
        service.compute(2024, 1)


def test_service_invalid_input_is_not_computed():
    """Invalid input fails before any computation."""
    service = BusinessDayService(Config(), today=date(2024, 1, 1))
    service.load()
    with pytest.raises(InvalidInputError):
        service.compute_from_input("")
