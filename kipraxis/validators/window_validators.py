"""Guard functions for call windows and reporting date ranges.

These checks never raise for a well-formed but disallowed window; they
return a WindowCheck carrying a machine-readable reason and the German
message shown in the dashboard. Malformed input (unparseable times or
dates) raises the typed errors from ``kipraxis.errors``.
"""

import datetime as dt
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from kipraxis.calculators.time_utils import (
    DEFAULT_TIMEZONE,
    DateLike,
    parse_clock_time,
    to_datetime,
    to_practice_time,
)


class WindowRejection(str, Enum):
    """Why a call window or date range was rejected."""

    OUTSIDE_ALLOWED_HOURS = "outside_allowed_hours"
    START_NOT_BEFORE_END = "start_not_before_end"
    RANGE_TOO_LONG = "range_too_long"
    END_IN_FUTURE = "end_in_future"


MESSAGES_DE = {
    WindowRejection.OUTSIDE_ALLOWED_HOURS: (
        "Anrufzeiten müssen zwischen {earliest} und {latest} Uhr liegen"
    ),
    WindowRejection.START_NOT_BEFORE_END: "Startzeit muss vor der Endzeit liegen",
    WindowRejection.RANGE_TOO_LONG: "Zeitraum darf nicht länger als 1 Jahr sein",
    WindowRejection.END_IN_FUTURE: "Enddatum darf nicht in der Zukunft liegen",
}

# Date ranges use "Startdatum"/"Enddatum" wording
DATE_RANGE_ORDER_MESSAGE_DE = "Startdatum muss vor Enddatum liegen"

CALL_WINDOW_EARLIEST = "08:00"
CALL_WINDOW_LATEST = "18:00"
MAX_RANGE_DAYS = 365


@dataclass(frozen=True)
class WindowCheck:
    """Result of a window check.

    Attributes:
        valid: Whether the window is acceptable
        reason: Rejection reason (None when valid)
        message: Localized message for the rejection (None when valid)
    """

    valid: bool
    reason: Optional[WindowRejection] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


_VALID = WindowCheck(valid=True)


def _reject(reason: WindowRejection, message: Optional[str] = None, **fmt) -> WindowCheck:
    return WindowCheck(
        valid=False,
        reason=reason,
        message=message or MESSAGES_DE[reason].format(**fmt),
    )


def is_valid_call_window(
    from_: str,
    to: str,
    earliest: str = CALL_WINDOW_EARLIEST,
    latest: str = CALL_WINDOW_LATEST,
) -> WindowCheck:
    """Check that a call-back window lies within the allowed hours.

    A window is rejected when it starts before ``earliest``, ends after
    ``latest``, or does not start strictly before it ends.

    Args:
        from_: Window start as ``HH:MM``
        to: Window end as ``HH:MM``
        earliest: Earliest allowed start
        latest: Latest allowed end

    Raises:
        InvalidTimeValue: If any time is not a valid ``HH:MM`` string

    Example:
        >>> is_valid_call_window("09:00", "17:00").valid
        True
        >>> is_valid_call_window("07:00", "17:00").reason.value
        'outside_allowed_hours'
    """
    start = parse_clock_time(from_)
    end = parse_clock_time(to)

    if start < parse_clock_time(earliest) or end > parse_clock_time(latest):
        return _reject(
            WindowRejection.OUTSIDE_ALLOWED_HOURS, earliest=earliest, latest=latest
        )

    if start >= end:
        return _reject(WindowRejection.START_NOT_BEFORE_END)

    return _VALID


def validate_date_range(
    from_: DateLike,
    to: DateLike,
    now: Optional[DateLike] = None,
    max_days: int = MAX_RANGE_DAYS,
    timezone: str = DEFAULT_TIMEZONE,
) -> WindowCheck:
    """Check a custom reporting date range.

    Rejects ranges where ``from_`` is not before ``to``, that span more
    than ``max_days`` days, or that end in the future.

    Args:
        from_: Range start
        to: Range end
        now: Reference time, defaults to the current time
        max_days: Longest allowed range in days
        timezone: Practice time zone. Dates with an offset are converted to
            it, naive dates and ``now`` are read as wall-clock time there

    Raises:
        InvalidDateRange: If a date cannot be parsed
    """
    start = to_datetime(from_, "from", timezone)
    end = to_datetime(to, "to", timezone)
    if now is None:
        reference = to_practice_time(dt.datetime.now(dt.timezone.utc), timezone)
    else:
        reference = to_datetime(now, "now", timezone)

    if start >= end:
        return _reject(
            WindowRejection.START_NOT_BEFORE_END, DATE_RANGE_ORDER_MESSAGE_DE
        )

    if math.ceil((end - start) / dt.timedelta(days=1)) > max_days:
        return _reject(WindowRejection.RANGE_TOO_LONG)

    if end > reference:
        return _reject(WindowRejection.END_IN_FUTURE)

    return _VALID
