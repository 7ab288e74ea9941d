"""Holiday source backed by the jpholiday library."""

from datetime import date

import jpholiday

from jpbizday.models import Holiday


class JpholidayHolidaySource:
    """Japanese holidays as published by jpholiday."""

    def between(self, start: date, end: date) -> list[Holiday]:
        """Holidays in the inclusive range [start, end]."""
        return [Holiday(holiday_date, name) for holiday_date, name in jpholiday.between(start, end)]
