"""Date and clock-time parsing utilities.

This module provides low-level helpers shared by the calculators and
validators:
- Parsing ``HH:MM`` clock strings into minutes since midnight
- Coercing dates given as ``dt.date``, ``dt.datetime`` or ISO-8601 strings
- Converting between dt.time and minutes

Parsing failures raise the typed errors from ``kipraxis.errors`` so callers
never receive a silently defaulted value.
"""

import datetime as dt
from typing import Optional, Union
from zoneinfo import ZoneInfo

from kipraxis.errors import InvalidDateRange, InvalidTimeValue

DateLike = Union[dt.date, dt.datetime, str]

DEFAULT_TIMEZONE = "Europe/Berlin"


def convert_time_to_minutes(time: dt.time) -> int:
    """Convert a dt.time object to minutes since midnight.

    Example:
        >>> convert_time_to_minutes(dt.time(9, 30))
        570
    """
    return time.hour * 60 + time.minute


def parse_clock_time(value: str) -> int:
    """Parse an ``HH:MM`` string into minutes since midnight.

    ``24:00`` is not accepted; the latest valid value is ``23:59``.

    Args:
        value: Clock time such as ``"08:30"``

    Returns:
        Minutes since midnight (0-1439)

    Raises:
        InvalidTimeValue: If the string is not a valid ``HH:MM`` time

    Example:
        >>> parse_clock_time("08:30")
        510
    """
    if not isinstance(value, str):
        raise InvalidTimeValue(f"Expected 'HH:MM' string, got {type(value).__name__}")

    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise InvalidTimeValue(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59:
        raise InvalidTimeValue(f"Time out of range: '{value}'")

    return hours * 60 + minutes


def minutes_to_clock_time(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``.

    Example:
        >>> minutes_to_clock_time(510)
        '08:30'
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_datetime(
    value: DateLike, field_name: str = "date", timezone: Optional[str] = None
) -> dt.datetime:
    """Coerce a date-like value into a naive datetime.

    Dates become midnight of that day. Timezone-aware datetimes (and ISO
    strings carrying an offset or ``Z``) are converted to ``timezone`` (UTC
    when not given) and made naive so that all values in a computation are
    comparable. Naive values are taken as already being in that zone.

    Raises:
        InvalidDateRange: If the value cannot be interpreted as a date
    """
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            raise InvalidDateRange(f"Unparseable {field_name}: '{value}'")
    else:
        raise InvalidDateRange(
            f"Unsupported {field_name} type: {type(value).__name__}"
        )

    if parsed.tzinfo is not None:
        zone = ZoneInfo(timezone) if timezone else dt.timezone.utc
        parsed = parsed.astimezone(zone).replace(tzinfo=None)
    return parsed


def to_practice_time(moment: dt.datetime, timezone: str = DEFAULT_TIMEZONE) -> dt.datetime:
    """Express a timestamp as naive wall-clock time in the practice's zone.

    Aware timestamps are converted; naive ones are assumed to be local
    already and returned unchanged.

    Example:
        >>> to_practice_time(dt.datetime(2025, 8, 4, 6, 30, tzinfo=dt.timezone.utc))
        datetime.datetime(2025, 8, 4, 8, 30)
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def to_date(value: DateLike, field_name: str = "date") -> dt.date:
    """Coerce a date-like value into a calendar date.

    Raises:
        InvalidDateRange: If the value cannot be interpreted as a date
    """
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return value
    return to_datetime(value, field_name).date()
