"""Shared fixtures."""

from collections.abc import Iterable
from datetime import date, timedelta

import pytest

from jpbizday.calculator import BusinessDayFinder
from jpbizday.holidays import HolidayCalendar, RuleBasedHolidayCalendar
from jpbizday.models import Holiday


class FixedHolidayCalendar(HolidayCalendar):
    """Calendar whose holidays are exactly the given dates."""

    def __init__(self, dates: Iterable[date]) -> None:
        super().__init__()
        self.dates = set(dates)
        self.computed_years: list[int] = []

    def _compute(self, year: int) -> Iterable[Holiday]:
        self.computed_years.append(year)
        return [Holiday(d, "test") for d in self.dates if d.year == year]


def date_range(start: date, end: date) -> list[date]:
    """Inclusive list of dates."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


@pytest.fixture
def calendar():
    """Rule-based calendar with its own cache."""
    return RuleBasedHolidayCalendar()


@pytest.fixture
def finder(calendar):
    """Business day finder on the rule-based calendar."""
    return BusinessDayFinder(calendar)
