"""Holiday source backed by the Cabinet Office holiday CSV."""

import csv
import io
import logging
from datetime import date, datetime
from typing import Self

import requests

from jpbizday.models import Holiday

logger = logging.getLogger(__name__)

CABINET_OFFICE_CSV_URL = "https://www8.cao.go.jp/chosei/shukujitsu/syukujitsu.csv"
CSV_ENCODING = "cp932"
REQUEST_TIMEOUT = 10  # seconds


class CabinetOfficeHolidaySource:
    """
    Holidays published by the Cabinet Office of Japan.

    The CSV lists every holiday, substitute holiday and citizen's holiday from
    1955 onwards, one ``YYYY/M/D,name`` row per holiday. It is downloaded once,
    on first use.
    """

    def __init__(self, url: str = CABINET_OFFICE_CSV_URL) -> None:
        self._url: str = url
        self._session: requests.Session | None = None
        self._holidays: list[Holiday] | None = None

    def __enter__(self) -> Self:
        self._session = requests.Session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session:
            self._session.close()
        self._session = None

    @property
    def session(self) -> requests.Session:
        """Get the active session."""
        if not self._session:
            msg = "CabinetOfficeHolidaySource should be used as a context manager"
            raise RuntimeError(msg)
        return self._session

    def fetch(self) -> list[Holiday]:
        """Download and parse the holiday CSV."""
        logger.info("Downloading holidays from %s", self._url)
        response = self.session.get(self._url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        self._holidays = self.parse_csv(response.content.decode(CSV_ENCODING))
        logger.info("Loaded %d holidays", len(self._holidays))
        return self._holidays

    def between(self, start: date, end: date) -> list[Holiday]:
        """Holidays in the inclusive range [start, end]."""
        holidays = self._holidays if self._holidays is not None else self.fetch()
        return [holiday for holiday in holidays if start <= holiday.date <= end]

    @staticmethod
    def parse_csv(text: str) -> list[Holiday]:
        """Parse CSV text into holidays, skipping the header row."""
        holidays = []
        reader = csv.reader(io.StringIO(text))
        for line_number, row in enumerate(reader, start=1):
            if not row or not row[0].strip():
                continue
            raw_date = row[0].strip()
            if not raw_date[0].isdigit():
                # Header
                continue
            if len(row) < 2:
                msg = f"Missing holiday name on line {line_number}"
                raise ValueError(msg)
            holiday_date = datetime.strptime(raw_date, "%Y/%m/%d").date()
            holidays.append(Holiday(holiday_date, row[1].strip()))
        if not holidays:
            msg = "Holiday CSV contains no holidays"
            raise ValueError(msg)
        return sorted(holidays)
