"""Data models for holidays and business days."""

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum


def day_of_week(target_date: date) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return (target_date.weekday() + 1) % 7


@dataclass(frozen=True, order=True)
class Holiday:
    """A single public holiday."""

    date: date
    name: str


class DayType(str, Enum):
    """Type of day."""

    BUSINESS_DAY = "business_day"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


@dataclass
class DayRecord:
    """Record for a single day of the month view."""

    date: date
    day_type: DayType
    holiday_name: str | None = None

    @property
    def is_business_day(self) -> bool:
        """Whether the day counts as a business day."""
        return self.day_type == DayType.BUSINESS_DAY


@dataclass(frozen=True)
class ComputedDates:
    """Business days selected for one month."""

    second: date
    third: date
    second_from_three: date
    second_from_eight: date
    second_from_twelve: date
    second_from_twenty_six: date
    fifth_from_twenty_six: date

    def items(self) -> list[tuple[str, date]]:
        """(field name, date) pairs in field order."""
        return [(field.name, getattr(self, field.name)) for field in fields(self)]


FIELD_TITLES = {
    "second": "2nd business day",
    "third": "3rd business day",
    "second_from_three": "2nd from the 3rd",
    "second_from_eight": "2nd from the 8th",
    "second_from_twelve": "2nd from the 12th",
    "second_from_twenty_six": "2nd from the 26th",
    "fifth_from_twenty_six": "5th from the 26th",
}


def format_plain_date(value: date) -> str:
    """Format a date as Y/M/D without zero padding."""
    return f"{value.year}/{value.month}/{value.day}"
