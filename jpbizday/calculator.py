"""Business day search on top of a holiday calendar."""

import logging
from calendar import monthrange
from collections.abc import Iterator
from datetime import date, timedelta

from jpbizday.errors import InvalidArgumentError, SearchExhaustedError
from jpbizday.holidays import HolidayCalendar
from jpbizday.models import DayRecord, DayType

logger = logging.getLogger(__name__)

# Upper bound on calendar days scanned by nth_business_day_from
DEFAULT_MAX_SCAN_DAYS = 120


def month_days(year: int, month: int) -> Iterator[date]:
    """Every calendar day of a month."""
    _, days_in_month = monthrange(year, month)
    for day in range(1, days_in_month + 1):
        yield date(year, month, day)


class BusinessDayFinder:
    """
    Finds business days: Monday to Friday, not a public holiday.

    The holiday set is looked up for each date's own year, so searches may
    cross year boundaries.
    """

    def __init__(
        self, calendar: HolidayCalendar, max_scan_days: int = DEFAULT_MAX_SCAN_DAYS
    ) -> None:
        if max_scan_days < 1:
            msg = f"max_scan_days must be at least 1, got {max_scan_days}"
            raise InvalidArgumentError(msg)
        self.calendar = calendar
        self.max_scan_days = max_scan_days

    def is_business_day(self, target_date: date) -> bool:
        """Check if a date is a business day."""
        # 5 = Saturday, 6 = Sunday
        if target_date.weekday() in (5, 6):
            return False
        return not self.calendar.is_holiday(target_date)

    def business_days_in_month(self, year: int, month: int) -> Iterator[date]:
        """Business days of a month in chronological order. Each call starts over."""
        holidays = self.calendar.holidays_for_year(year)
        return (
            day for day in month_days(year, month) if day.weekday() < 5 and day not in holidays
        )

    def nth_business_day_from(self, start: date, n: int) -> date:
        """
        Find the n-th business day counting from start (inclusive).

        Raises:
            InvalidArgumentError: n is smaller than 1.
            SearchExhaustedError: fewer than n business days within max_scan_days.
        """
        if n < 1:
            msg = f"n must be at least 1, got {n}"
            raise InvalidArgumentError(msg)

        count = 0
        current = start
        for _ in range(self.max_scan_days):
            if self.is_business_day(current):
                count += 1
                if count == n:
                    return current
            try:
                current += timedelta(days=1)
            except OverflowError:
                # Past 9999-12-31
                break

        logger.warning(
            "Business day %d from %s not found within %d days", n, start, self.max_scan_days
        )
        raise SearchExhaustedError

    def generate_month_calendar(self, year: int, month: int) -> list[DayRecord]:
        """One record per day of the month, classified by day type."""
        records = []
        for target_date in month_days(year, month):
            holiday_name = self.calendar.holiday_name(target_date)
            if target_date.weekday() in (5, 6):
                day_type = DayType.WEEKEND
            elif holiday_name is not None:
                day_type = DayType.HOLIDAY
            else:
                day_type = DayType.BUSINESS_DAY
            records.append(
                DayRecord(date=target_date, day_type=day_type, holiday_name=holiday_name)
            )
        return records
