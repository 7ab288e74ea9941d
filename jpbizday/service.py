"""Business day selection and the holiday data readiness gate."""

import logging
import re
from datetime import date
from enum import Enum

import requests

from jpbizday.calculator import BusinessDayFinder
from jpbizday.config import Config
from jpbizday.errors import (
    HolidayDataUnavailableError,
    InsufficientBusinessDaysError,
    InvalidInputError,
)
from jpbizday.holidays import HolidayCalendar, RuleBasedHolidayCalendar
from jpbizday.messages import Message
from jpbizday.models import ComputedDates, DayRecord
from jpbizday.sources import (
    CabinetOfficeHolidaySource,
    JpholidayHolidaySource,
    SourceHolidayCalendar,
)

logger = logging.getLogger(__name__)

_MONTH_INPUT_REGEX = re.compile(r"^(\d{4})[-/](\d{1,2})$")

# Day of month -> message when fewer than 2 business days fall on/after it
SECOND_FROM_THRESHOLDS: dict[int, Message] = {
    3: Message.FEWER_THAN_TWO_FROM_THREE,
    8: Message.FEWER_THAN_TWO_FROM_EIGHT,
    12: Message.FEWER_THAN_TWO_FROM_TWELVE,
    26: Message.FEWER_THAN_TWO_FROM_TWENTY_SIX,
}


def parse_month_input(text: str | None) -> tuple[int, int]:
    """Parse ``YYYY-MM`` (or ``YYYY/MM``) into (year, month)."""
    if text is None or not text.strip():
        raise InvalidInputError(Message.EMPTY_INPUT)
    match = _MONTH_INPUT_REGEX.match(text.strip())
    if not match:
        raise InvalidInputError(Message.UNPARSEABLE_INPUT)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidInputError(Message.UNPARSEABLE_INPUT)
    return year, month


def default_month(today: date) -> tuple[int, int]:
    """The month after today."""
    if today.month == 12:
        return today.year + 1, 1
    return today.year, today.month + 1


def _second_on_or_after(business_days: list[date], day: int) -> date:
    matching = [d for d in business_days if d.day >= day]
    if len(matching) < 2:
        raise InsufficientBusinessDaysError(SECOND_FROM_THRESHOLDS[day])
    return matching[1]


def select_dates(finder: BusinessDayFinder, year: int, month: int) -> ComputedDates:
    """
    Pick the business days used for one month.

    Raises:
        InsufficientBusinessDaysError: one of the thresholds is not met.
        SearchExhaustedError: the 5th business day from the 26th was not found.
    """
    business_days = list(finder.business_days_in_month(year, month))
    if len(business_days) < 3:
        raise InsufficientBusinessDaysError(Message.FEWER_THAN_THREE)

    return ComputedDates(
        second=business_days[1],
        third=business_days[2],
        second_from_three=_second_on_or_after(business_days, 3),
        second_from_eight=_second_on_or_after(business_days, 8),
        second_from_twelve=_second_on_or_after(business_days, 12),
        second_from_twenty_six=_second_on_or_after(business_days, 26),
        fifth_from_twenty_six=finder.nth_business_day_from(date(year, month, 26), 5),
    )


def build_calendar(holiday_source: str) -> HolidayCalendar:
    """Create the holiday calendar for a configured source name."""
    if holiday_source == "rules":
        return RuleBasedHolidayCalendar()
    if holiday_source == "jpholiday":
        return SourceHolidayCalendar(JpholidayHolidaySource())
    if holiday_source == "cao":
        with CabinetOfficeHolidaySource() as source:
            source.fetch()
        return SourceHolidayCalendar(source)
    msg = f"Unknown holiday source {holiday_source!r}"
    raise ValueError(msg)


class LoadState(str, Enum):
    """Readiness of the holiday data."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class BusinessDayService:
    """
    Query interface, available once the holiday data is loaded.

    ``load`` must be called once before any query. A failed load is final for
    this instance: every later query raises HolidayDataUnavailableError.
    """

    def __init__(self, config: Config | None = None, today: date | None = None) -> None:
        self.config = config or Config()
        self.today = today or date.today()
        self.state = LoadState.PENDING
        self._finder: BusinessDayFinder | None = None

    def load(self) -> None:
        """Load the configured holiday data."""
        if self.state != LoadState.PENDING:
            return
        try:
            calendar = build_calendar(self.config.holiday_source)
            # Surfaces missing or malformed data now rather than on first query
            calendar.holidays_for_year(self.today.year)
        except (OSError, ValueError, requests.RequestException) as e:
            logger.error("Failed to load holiday data from %r: %s", self.config.holiday_source, e)
            self.state = LoadState.FAILED
            raise HolidayDataUnavailableError from e

        self._finder = BusinessDayFinder(calendar, max_scan_days=self.config.max_scan_days)
        self.state = LoadState.READY
        logger.info("Holiday data loaded from %r", self.config.holiday_source)

    @property
    def finder(self) -> BusinessDayFinder:
        """Get the business day finder."""
        if self.state != LoadState.READY or self._finder is None:
            raise HolidayDataUnavailableError
        return self._finder

    def compute(self, year: int, month: int) -> ComputedDates:
        """Selected business days for a month."""
        return select_dates(self.finder, year, month)

    def compute_from_input(self, text: str | None) -> tuple[int, int, ComputedDates]:
        """Parse ``YYYY-MM`` input and compute its dates."""
        year, month = parse_month_input(text)
        return year, month, self.compute(year, month)

    def month_calendar(self, year: int, month: int) -> list[DayRecord]:
        """Day records for the month view."""
        return self.finder.generate_month_calendar(year, month)
