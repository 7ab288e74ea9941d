"""Main entry point for jpbizday."""

import logging
import sys
from datetime import date
from pathlib import Path

from jpbizday.config import DEFAULT_CONFIG_PATH, DEFAULT_LOG_PATH, HOLIDAY_SOURCES, Config
from jpbizday.errors import ConfigError, UserFacingError
from jpbizday.models import FIELD_TITLES, format_plain_date
from jpbizday.service import BusinessDayService, default_month, parse_month_input

USAGE = """Usage:
  jpbizday              Run the TUI
  jpbizday show [YYYY-MM]
                        Print the business days of a month (default: next month)
  jpbizday config       Interactive configuration setup
"""


def setup_logging(level: str, log_path: Path | None = None) -> None:
    """Log to a file (TUI) or to stderr."""
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def configure() -> None:
    """Interactive configuration setup."""
    # Using sys.stdout.write for interactive prompts is allowed
    sys.stdout.write("jpbizday Configuration\n")
    sys.stdout.write("=" * 40 + "\n")
    current = Config.load() or Config()
    holiday_source = input(
        f"Holiday source {'/'.join(HOLIDAY_SOURCES)} [{current.holiday_source}]: "
    )
    max_scan_days = input(f"Max scan days [{current.max_scan_days}]: ")
    labels = {}
    for name, title in FIELD_TITLES.items():
        label = input(f"Calendar label for {title} [{current.labels.get(name, '')}]: ")
        labels[name] = label or current.labels.get(name, "")

    try:
        config = Config(
            holiday_source=holiday_source or current.holiday_source,
            max_scan_days=int(max_scan_days) if max_scan_days else current.max_scan_days,
            log_level=current.log_level,
            labels={name: label for name, label in labels.items() if label},
        )
    except (ConfigError, ValueError) as e:
        sys.stderr.write(f"Invalid configuration: {e}\n")
        sys.exit(1)
    config.save()
    sys.stdout.write("\n✓ Configuration saved successfully!\n")
    sys.stdout.write(f"Config file: {DEFAULT_CONFIG_PATH}\n")


def show(month_text: str | None, config: Config, today: date | None = None) -> int:
    """Print the computed dates for a month. Returns the exit code."""
    today = today or date.today()
    service = BusinessDayService(config, today)
    try:
        service.load()
        if month_text is None:
            year, month = default_month(today)
        else:
            year, month = parse_month_input(month_text)
        dates = service.compute(year, month)
    except UserFacingError as e:
        sys.stderr.write(f"{e.message.value}\n")
        return 1

    sys.stdout.write(f"{year}/{month:02d}\n")
    for name, value in dates.items():
        sys.stdout.write(f"  {FIELD_TITLES[name]:<20} {format_plain_date(value)}\n")
    return 0


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]
    if args and args[0] == "config":
        configure()
        return

    try:
        config = Config.resolve()
    except ConfigError as e:
        sys.stderr.write(f"Invalid configuration: {e}\n")
        sys.exit(1)

    if args and args[0] == "show":
        setup_logging(config.log_level)
        sys.exit(show(args[1] if len(args) > 1 else None, config))
    if args:
        sys.stderr.write(USAGE)
        sys.exit(2)

    from jpbizday.app import JpbizdayApp

    setup_logging(config.log_level, DEFAULT_LOG_PATH)
    app = JpbizdayApp(config)
    app.run()


if __name__ == "__main__":
    main()
