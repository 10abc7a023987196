"""Typed errors raised by the usage and billing core.

All errors are deterministic for a given input, so callers should surface
them (e.g. show "no data") rather than retry.
"""

from typing import Any, Optional


class KipraxisError(Exception):
    """Base class for all errors raised by the kipraxis core."""


class InvalidDateRange(KipraxisError, ValueError):
    """A date could not be parsed, or a window starts after it ends.

    Attributes:
        start: The offending start value (if known)
        end: The offending end value (if known)
    """

    def __init__(self, message: str, start: Any = None, end: Any = None):
        self.start = start
        self.end = end
        super().__init__(message)


class InvalidBillingRule(KipraxisError, ValueError):
    """A billing rule uses an unknown rounding mode or malformed values."""

    def __init__(self, message: str, rounding: Any = None):
        self.rounding = rounding
        super().__init__(message)


class InvalidTimeValue(KipraxisError, ValueError):
    """A clock time is not in ``HH:MM`` format."""


class UsageDataError(KipraxisError):
    """A usage or call record read from a file failed validation.

    Attributes:
        row_number: 1-based data row in the source file
    """

    def __init__(self, message: str, row_number: Optional[int] = None):
        self.row_number = row_number
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message)
