"""Configuration management."""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

from jpbizday.calculator import DEFAULT_MAX_SCAN_DAYS
from jpbizday.errors import ConfigError
from jpbizday.models import FIELD_TITLES

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "jpbizday"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.ini"
DEFAULT_LOG_PATH = DEFAULT_CONFIG_DIR / "jpbizday.log"

HOLIDAY_SOURCES = ("rules", "jpholiday", "cao")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LABEL_FIELDS = tuple(FIELD_TITLES)

DEFAULT_LABELS = {
    "second": "2nd business day",
    "third": "3rd business day",
}


@dataclass
class Config:
    """Holiday source, search window, logging and calendar labels."""

    holiday_source: str = "rules"
    max_scan_days: int = DEFAULT_MAX_SCAN_DAYS
    log_level: str = "WARNING"
    # ComputedDates field name -> calendar event title
    labels: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.holiday_source not in HOLIDAY_SOURCES:
            msg = f"Unknown holiday source {self.holiday_source!r}, expected {HOLIDAY_SOURCES}"
            raise ConfigError(msg)
        if self.max_scan_days < 1:
            msg = f"max_scan_days must be at least 1, got {self.max_scan_days}"
            raise ConfigError(msg)
        if self.log_level not in LOG_LEVELS:
            msg = f"Unknown log level {self.log_level!r}"
            raise ConfigError(msg)
        unknown = set(self.labels) - set(LABEL_FIELDS)
        if unknown:
            msg = f"Unknown label keys: {', '.join(sorted(unknown))}"
            raise ConfigError(msg)

    @classmethod
    def from_env(cls) -> "Config | None":
        """Load configuration from environment variables, if any is set."""
        source = os.environ.get("JPBIZDAY_HOLIDAY_SOURCE")
        max_scan_days = os.environ.get("JPBIZDAY_MAX_SCAN_DAYS")
        log_level = os.environ.get("JPBIZDAY_LOG_LEVEL")
        if source is None and max_scan_days is None and log_level is None:
            return None

        defaults = cls()
        if max_scan_days:
            scan_days = _parse_int(max_scan_days, "JPBIZDAY_MAX_SCAN_DAYS")
        else:
            scan_days = defaults.max_scan_days
        return cls(
            holiday_source=source or defaults.holiday_source,
            max_scan_days=scan_days,
            log_level=log_level or defaults.log_level,
        )

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config | None":
        """Load configuration from file."""
        if not path.is_file():
            return None

        config = configparser.ConfigParser(interpolation=None)
        config.read(path, encoding="utf-8")
        section = config["jpbizday"] if config.has_section("jpbizday") else {}
        defaults = cls()
        labels = dict(config["labels"]) if config.has_section("labels") else defaults.labels
        return cls(
            holiday_source=section.get("holidaySource", defaults.holiday_source),
            max_scan_days=_parse_int(
                section.get("maxScanDays", str(defaults.max_scan_days)), "maxScanDays"
            ),
            log_level=section.get("logLevel", defaults.log_level),
            labels=labels,
        )

    @classmethod
    def resolve(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config":
        """Environment first, then the config file, then defaults."""
        return cls.from_env() or cls.load(path) or cls()

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        config = configparser.ConfigParser(interpolation=None)
        config["jpbizday"] = {
            "holidaySource": self.holiday_source,
            "maxScanDays": str(self.max_scan_days),
            "logLevel": self.log_level,
        }
        config["labels"] = self.labels
        with path.open("w", encoding="utf-8") as config_file:
            config.write(config_file)


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        msg = f"{name} must be an integer, got {value!r}"
        raise ConfigError(msg) from e
