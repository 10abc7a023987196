"""Calendar calculations for holidays and appointments.

This module implements the date logic behind the practice calendar:
- Holiday durations and lookups
- Week dates for the week view (Monday first)
- Appointments that touch a one-hour grid slot
- Appointments that collide with a newly entered holiday
- Time options offered in the opening-hours editor
"""

import datetime as dt
import logging
from typing import List, Optional, Sequence

from kipraxis.calculators.time_utils import DateLike, minutes_to_clock_time, to_date
from kipraxis.models.calendar import Appointment, Holiday

logger = logging.getLogger(__name__)


def get_holiday_duration(start: DateLike, end: Optional[DateLike] = None) -> int:
    """Number of days a holiday lasts, counting both start and end day.

    Args:
        start: First day of the holiday
        end: Last day of the holiday (defaults to ``start``)

    Raises:
        InvalidDateRange: If a date cannot be parsed

    Example:
        >>> get_holiday_duration("2025-12-24", "2025-12-26")
        3
        >>> get_holiday_duration("2025-10-03")
        1
    """
    start_day = to_date(start, "start")
    end_day = to_date(end, "end") if end is not None else start_day
    return (end_day - start_day).days + 1


def get_week_dates(day: dt.date) -> List[dt.date]:
    """Return the seven dates (Monday to Sunday) of the week containing ``day``."""
    monday = day - dt.timedelta(days=day.weekday())
    return [monday + dt.timedelta(days=i) for i in range(7)]


def get_holiday_for_date(day: dt.date, holidays: Sequence[Holiday]) -> Optional[Holiday]:
    """Return the first holiday covering ``day``, or None."""
    for holiday in holidays:
        if holiday.covers(day):
            return holiday
    return None


def get_appointments_for_time_slot(
    day: dt.date, hour: int, appointments: Sequence[Appointment]
) -> List[Appointment]:
    """Return appointments that overlap the one-hour slot starting at ``hour``.

    An appointment is shown in a slot when it starts inside the slot, ends
    inside the slot, or spans the whole slot. Slots are half-open, so an
    appointment ending exactly at the top of the hour is not shown in the
    following slot and one starting at the top of the hour is not shown in
    the preceding slot.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be between 0 and 23, got {hour}")

    slot_start = dt.datetime.combine(day, dt.time(hour, 0))
    slot_end = slot_start + dt.timedelta(hours=1)

    return [apt for apt in appointments if apt.start < slot_end and apt.end > slot_start]


def find_holiday_conflicts(
    holiday: Holiday, appointments: Sequence[Appointment]
) -> List[Appointment]:
    """Return appointments that fall on any day of ``holiday``.

    Conflicts are ordered by start time so they can be rescheduled in order.
    """
    closed_from = dt.datetime.combine(holiday.start, dt.time.min)
    closed_until = dt.datetime.combine(holiday.last_day + dt.timedelta(days=1), dt.time.min)

    conflicts = sorted(
        (apt for apt in appointments if apt.start < closed_until and apt.end > closed_from),
        key=lambda apt: apt.start,
    )
    if conflicts:
        logger.info(
            f"Holiday {holiday.start}..{holiday.last_day} conflicts with "
            f"{len(conflicts)} appointment(s)"
        )
    return conflicts


def generate_time_options(
    first_hour: int = 8, last_hour: int = 18, step_minutes: int = 30
) -> List[str]:
    """List ``HH:MM`` options from ``first_hour`` to ``last_hour`` inclusive.

    Example:
        >>> generate_time_options(8, 9)
        ['08:00', '08:30', '09:00']
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    return [
        minutes_to_clock_time(m)
        for m in range(first_hour * 60, last_hour * 60 + 1, step_minutes)
    ]
