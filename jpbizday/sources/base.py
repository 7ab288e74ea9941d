"""Holiday calendar backed by an external holiday source."""

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from jpbizday.holidays import HolidayCache, HolidayCalendar
from jpbizday.models import Holiday


class HolidaySource(Protocol):
    """Anything that can list the holidays in a date range."""

    def between(self, start: date, end: date) -> list[Holiday]:
        """Holidays in the inclusive range [start, end]."""
        ...


class SourceHolidayCalendar(HolidayCalendar):
    """Holiday calendar that caches a source's holidays per year."""

    def __init__(self, source: HolidaySource, cache: HolidayCache | None = None) -> None:
        super().__init__(cache)
        self.source = source

    def _compute(self, year: int) -> Iterable[Holiday]:
        holidays = self.source.between(date(year, 1, 1), date(year, 12, 31))
        return [holiday for holiday in holidays if holiday.date.year == year]
