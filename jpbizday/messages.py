"""User-facing messages."""

from enum import Enum


class Message(str, Enum):
    """Fixed set of messages shown instead of a result."""

    EMPTY_INPUT = "Please select a year and month."
    UNPARSEABLE_INPUT = "The year/month format is not valid (expected YYYY-MM)."
    FEWER_THAN_THREE = "This month has fewer than 3 business days."
    FEWER_THAN_TWO_FROM_THREE = "This month has fewer than 2 business days from the 3rd."
    FEWER_THAN_TWO_FROM_EIGHT = "This month has fewer than 2 business days from the 8th."
    FEWER_THAN_TWO_FROM_TWELVE = "This month has fewer than 2 business days from the 12th."
    FEWER_THAN_TWO_FROM_TWENTY_SIX = "This month has fewer than 2 business days from the 26th."
    SEARCH_EXHAUSTED = "Could not find the 5th business day from the 26th."
    HOLIDAY_DATA_UNAVAILABLE = "Holiday data could not be loaded. Restart to try again."
