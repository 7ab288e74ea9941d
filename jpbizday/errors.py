"""Custom exceptions."""

from jpbizday.messages import Message


class JpbizdayError(Exception):
    """Base exception for jpbizday."""


class UserFacingError(JpbizdayError):
    """Error that is reported to the user as one fixed message."""

    def __init__(self, message: Message) -> None:
        super().__init__(message.value)
        self.message = message


class InvalidInputError(UserFacingError):
    """Raised when the year/month input is missing or cannot be parsed."""


class InvalidArgumentError(JpbizdayError, ValueError):
    """Raised when a business-day query gets an out-of-range argument."""


class InsufficientBusinessDaysError(UserFacingError):
    """Raised when a month does not have enough business days for a selection."""


class SearchExhaustedError(UserFacingError):
    """Raised when the nth business day is not found within the scan window."""

    def __init__(self, message: Message = Message.SEARCH_EXHAUSTED) -> None:
        super().__init__(message)


class HolidayDataUnavailableError(UserFacingError):
    """Raised when holiday data could not be loaded, or was never loaded."""

    def __init__(self, message: Message = Message.HOLIDAY_DATA_UNAVAILABLE) -> None:
        super().__init__(message)


class ConfigError(JpbizdayError):
    """Raised when the configuration contains an invalid value."""
