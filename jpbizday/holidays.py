"""Japanese public holiday calendar.

Each rule is a pure function ``year -> list[Holiday]``. The primary rules are
unioned first, then substitute holidays (振替休日) are derived from the primary
set and citizen's holidays (国民の休日) from the result.
"""

import logging
import threading
from calendar import MONDAY, SUNDAY, monthrange
from collections.abc import Callable, Iterable, Mapping
from datetime import date, timedelta
from math import floor
from types import MappingProxyType
from typing import TypeAlias

from jpbizday.models import Holiday

logger = logging.getLogger(__name__)

HolidayRule: TypeAlias = Callable[[int], list[Holiday]]

# Equinox approximation, valid for 1980-2099
EQUINOX_BASE_YEAR = 1980
EQUINOX_DRIFT = 0.242194
VERNAL_EQUINOX_BASE = 20.8431
AUTUMNAL_EQUINOX_BASE = 23.2488

MARINE_DAY = "海の日"
MOUNTAIN_DAY = "山の日"
SPORTS_DAY = "スポーツの日"
HEALTH_SPORTS_DAY = "体育の日"
SUBSTITUTE_HOLIDAY = "振替休日"
CITIZENS_HOLIDAY = "国民の休日"

FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "元日"),
    (2, 11, "建国記念の日"),
    (4, 29, "昭和の日"),
    (5, 3, "憲法記念日"),
    (5, 4, "みどりの日"),
    (5, 5, "こどもの日"),
    (11, 3, "文化の日"),
    (11, 23, "勤労感謝の日"),
)

# Olympic year relocations: year -> holiday name -> (month, day)
SPECIAL_SHIFTS: dict[int, dict[str, tuple[int, int]]] = {
    2020: {MARINE_DAY: (7, 23), SPORTS_DAY: (7, 24), MOUNTAIN_DAY: (8, 10)},
    2021: {MARINE_DAY: (7, 22), SPORTS_DAY: (7, 23), MOUNTAIN_DAY: (8, 8)},
}


def nth_weekday_of_month(year: int, month: int, occurrence: int, weekday: int) -> date:
    """
    Get the n-th occurrence of a weekday (Monday=0) in a month.

    Raises ValueError when the occurrence falls outside the month.
    """
    first_weekday, _ = monthrange(year, month)
    offset = (weekday - first_weekday) % 7
    return date(year, month, 1 + offset + 7 * (occurrence - 1))


def _special_shift(year: int, name: str) -> list[Holiday] | None:
    """Relocated date for a holiday in an exceptional year, if any."""
    shift = SPECIAL_SHIFTS.get(year, {}).get(name)
    if shift is None:
        return None
    month, day = shift
    return [Holiday(date(year, month, day), name)]


def fixed_holidays(year: int) -> list[Holiday]:
    """Holidays that fall on the same date every year."""
    return [Holiday(date(year, month, day), name) for month, day, name in FIXED_HOLIDAYS]


def emperors_birthday(year: int) -> list[Holiday]:
    """Emperor's Birthday (天皇誕生日). None in 2019."""
    if year >= 2020:
        return [Holiday(date(year, 2, 23), "天皇誕生日")]
    if 1989 <= year <= 2018:
        return [Holiday(date(year, 12, 23), "天皇誕生日")]
    return []


def coming_of_age_day(year: int) -> list[Holiday]:
    """Coming-of-Age Day (成人の日)."""
    if year >= 2000:
        return [Holiday(nth_weekday_of_month(year, 1, 2, MONDAY), "成人の日")]
    if year >= 1949:
        return [Holiday(date(year, 1, 15), "成人の日")]
    return []


def marine_day(year: int) -> list[Holiday]:
    """Marine Day (海の日)."""
    shifted = _special_shift(year, MARINE_DAY)
    if shifted is not None:
        return shifted
    if year >= 2003:
        return [Holiday(nth_weekday_of_month(year, 7, 3, MONDAY), MARINE_DAY)]
    if year >= 1996:
        return [Holiday(date(year, 7, 20), MARINE_DAY)]
    return []


def mountain_day(year: int) -> list[Holiday]:
    """Mountain Day (山の日)."""
    shifted = _special_shift(year, MOUNTAIN_DAY)
    if shifted is not None:
        return shifted
    if year >= 2016:
        return [Holiday(date(year, 8, 11), MOUNTAIN_DAY)]
    return []


def respect_for_the_aged_day(year: int) -> list[Holiday]:
    """Respect-for-the-Aged Day (敬老の日)."""
    if year >= 2003:
        return [Holiday(nth_weekday_of_month(year, 9, 3, MONDAY), "敬老の日")]
    if year >= 1966:
        return [Holiday(date(year, 9, 15), "敬老の日")]
    return []


def sports_day(year: int) -> list[Holiday]:
    """Sports Day (スポーツの日), Health-Sports Day (体育の日) before 2020."""
    shifted = _special_shift(year, SPORTS_DAY)
    if shifted is not None:
        return shifted
    name = SPORTS_DAY if year >= 2020 else HEALTH_SPORTS_DAY
    if year >= 2000:
        return [Holiday(nth_weekday_of_month(year, 10, 2, MONDAY), name)]
    if year >= 1966:
        return [Holiday(date(year, 10, 10), name)]
    return []


def _equinox_date(year: int, month: int, base: float) -> date:
    """
    Approximate equinox date in the given month.

    Far from the base year the day of month drifts below 1 or past the end of
    the month; it then rolls over into the neighbouring month.
    """
    elapsed = year - EQUINOX_BASE_YEAR
    day = floor(base + EQUINOX_DRIFT * elapsed) - floor(elapsed / 4)
    return date(year, month, 1) + timedelta(days=day - 1)


def vernal_equinox_day(year: int) -> list[Holiday]:
    """Vernal Equinox Day (春分の日). Approximation, accurate for 1980-2099 only."""
    return [Holiday(_equinox_date(year, 3, VERNAL_EQUINOX_BASE), "春分の日")]


def autumnal_equinox_day(year: int) -> list[Holiday]:
    """Autumnal Equinox Day (秋分の日). Approximation, accurate for 1980-2099 only."""
    return [Holiday(_equinox_date(year, 9, AUTUMNAL_EQUINOX_BASE), "秋分の日")]


PRIMARY_RULES: tuple[HolidayRule, ...] = (
    fixed_holidays,
    emperors_birthday,
    coming_of_age_day,
    vernal_equinox_day,
    marine_day,
    mountain_day,
    respect_for_the_aged_day,
    autumnal_equinox_day,
    sports_day,
)


def primary_holidays(
    year: int, rules: Iterable[HolidayRule] = PRIMARY_RULES
) -> dict[date, Holiday]:
    """Union of the primary rules, keyed by date."""
    holidays: dict[date, Holiday] = {}
    for rule in rules:
        for holiday in rule(year):
            holidays.setdefault(holiday.date, holiday)
    return holidays


def substitute_holidays(primary: Mapping[date, Holiday]) -> list[Holiday]:
    """
    Substitute holidays for primary holidays falling on a Sunday.

    The substitute is the first following day that is not a primary holiday.
    Substitutes are not themselves substituted.
    """
    substitutes = []
    for holiday_date in sorted(primary):
        if holiday_date.weekday() != SUNDAY:
            continue
        candidate = holiday_date + timedelta(days=1)
        while candidate in primary:
            candidate += timedelta(days=1)
        if candidate.year == holiday_date.year:
            substitutes.append(Holiday(candidate, SUBSTITUTE_HOLIDAY))
    return substitutes


def citizens_holidays(year: int, holidays: Mapping[date, Holiday]) -> list[Holiday]:
    """Non-holidays of the year sandwiched between two holidays."""
    # Ordinals, so that 0001-01-01 and 9999-12-31 have neighbours too
    holiday_ordinals = {holiday_date.toordinal() for holiday_date in holidays}
    result = []
    first = date(year, 1, 1).toordinal()
    last = date(year, 12, 31).toordinal()
    for ordinal in range(first, last + 1):
        if (
            ordinal not in holiday_ordinals
            and ordinal - 1 in holiday_ordinals
            and ordinal + 1 in holiday_ordinals
        ):
            result.append(Holiday(date.fromordinal(ordinal), CITIZENS_HOLIDAY))
    return result


def compute_holidays(year: int) -> list[Holiday]:
    """All public holidays of a year, in date order."""
    holidays = primary_holidays(year)
    for substitute in substitute_holidays(holidays):
        holidays.setdefault(substitute.date, substitute)
    for citizens in citizens_holidays(year, holidays):
        holidays[citizens.date] = citizens
    return sorted(holidays.values())


class HolidayCache:
    """Per-year holiday memo. Each year is computed at most once."""

    def __init__(self) -> None:
        self._years: dict[int, Mapping[date, Holiday]] = {}
        self._lock = threading.Lock()

    def get(
        self, year: int, compute: Callable[[int], Iterable[Holiday]]
    ) -> Mapping[date, Holiday]:
        """Get the holidays for a year, computing them on first access."""
        with self._lock:
            if year not in self._years:
                holidays = {holiday.date: holiday for holiday in sorted(compute(year))}
                self._years[year] = MappingProxyType(holidays)
                logger.debug("Cached %d holidays for %d", len(holidays), year)
            return self._years[year]

    def __contains__(self, year: object) -> bool:
        return year in self._years

    def __len__(self) -> int:
        return len(self._years)


class HolidayCalendar:
    """Base calendar: holiday lookups backed by a per-year cache."""

    def __init__(self, cache: HolidayCache | None = None) -> None:
        self.cache = cache if cache is not None else HolidayCache()

    def _compute(self, year: int) -> Iterable[Holiday]:
        raise NotImplementedError

    def holidays_by_date(self, year: int) -> Mapping[date, Holiday]:
        """Holidays of a year keyed by date."""
        return self.cache.get(year, self._compute)

    def holidays_for_year(self, year: int) -> frozenset[date]:
        """Set of holiday dates of a year."""
        return frozenset(self.holidays_by_date(year))

    def is_holiday(self, target_date: date) -> bool:
        """Check if a date is a public holiday."""
        return target_date in self.holidays_by_date(target_date.year)

    def holiday_name(self, target_date: date) -> str | None:
        """Get the name of a holiday, or None if not a holiday."""
        holiday = self.holidays_by_date(target_date.year).get(target_date)
        return holiday.name if holiday else None

    def between(self, start: date, end: date) -> list[Holiday]:
        """Holidays in the inclusive range [start, end], in date order."""
        result = []
        for year in range(start.year, end.year + 1):
            result.extend(
                holiday
                for holiday in self.holidays_by_date(year).values()
                if start <= holiday.date <= end
            )
        return result


class RuleBasedHolidayCalendar(HolidayCalendar):
    """Holiday calendar computed from the holiday rules."""

    def _compute(self, year: int) -> Iterable[Holiday]:
        return compute_holidays(year)
