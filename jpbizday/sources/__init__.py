"""External holiday data sources."""

from jpbizday.sources.base import HolidaySource, SourceHolidayCalendar
from jpbizday.sources.cabinet_office import CabinetOfficeHolidaySource
from jpbizday.sources.jpholiday_source import JpholidayHolidaySource

__all__ = [
    "CabinetOfficeHolidaySource",
    "HolidaySource",
    "JpholidayHolidaySource",
    "SourceHolidayCalendar",
]
