"""Cycle usage projection.

This module estimates the total billable minutes at the end of a billing
cycle from the daily totals recorded so far.

Two extrapolations are used depending on how much of the cycle has data:
- Linear: the average day so far, times the length of the cycle. Used while
  fewer than MOVING_AVERAGE_MIN_DAYS days are recorded.
- Moving average: minutes used so far plus the mean of the most recent
  seven days for every remaining day. Smooths out weekend troughs once a
  full week is available.

The day thresholds are fixed billing policy, not configuration.
"""

import datetime as dt
import logging
import math
from decimal import Decimal
from typing import List, Optional, Sequence

from kipraxis.calculators.billing_calculator import round_half_up
from kipraxis.calculators.time_utils import DateLike, to_date, to_datetime
from kipraxis.errors import InvalidDateRange
from kipraxis.models.usage import (
    Confidence,
    DailyUsage,
    ProjectionMethod,
    UsageProjection,
)

logger = logging.getLogger(__name__)

# Days of data needed before the linear projection is trusted at MEDIUM
LINEAR_MEDIUM_CONFIDENCE_DAYS = 3
# Days of data needed before switching to the moving average
MOVING_AVERAGE_MIN_DAYS = 7
# Window of the moving average
MOVING_AVERAGE_WINDOW = 7
# Days of data needed before the moving average is trusted at HIGH
MOVING_AVERAGE_HIGH_CONFIDENCE_DAYS = 14

_ONE_DAY = dt.timedelta(days=1)


def count_cycle_days(cycle_start: DateLike, cycle_end: DateLike) -> int:
    """Count the days spanned by a billing cycle.

    The cycle end is inclusive: an end given as a date (or a midnight
    timestamp) covers that whole day, so ``2025-08-01`` to ``2025-08-31`` is
    31 days. An end with a time of day is rounded up to whole days.

    Raises:
        InvalidDateRange: If a date is unparseable or start is after end
    """
    start = to_datetime(cycle_start, "cycle_start")
    end = to_datetime(cycle_end, "cycle_end")
    _check_order(start, end)

    if end.time() == dt.time(0, 0):
        end = end + _ONE_DAY

    return math.ceil((end - start) / _ONE_DAY)


def _check_order(start: dt.datetime, end: dt.datetime) -> None:
    if start > end:
        raise InvalidDateRange(
            f"Cycle start ({start.isoformat()}) is after cycle end ({end.isoformat()})",
            start=start,
            end=end,
        )


def filter_cycle_data(
    daily: Sequence[DailyUsage],
    cycle_start: dt.date,
    cycle_end: dt.date,
    today: dt.date,
) -> List[DailyUsage]:
    """Select the days of a cycle that have already happened.

    Keeps entries with ``cycle_start <= date <= min(today, cycle_end)``,
    ordered oldest first.
    """
    last_day = min(today, cycle_end)
    in_cycle = [day for day in daily if cycle_start <= day.date <= last_day]
    return sorted(in_cycle, key=lambda day: day.date)


def project_cycle_usage(
    daily: Sequence[DailyUsage],
    cycle_start: DateLike,
    cycle_end: DateLike,
    now: Optional[DateLike] = None,
) -> UsageProjection:
    """Project total usage for a billing cycle.

    Args:
        daily: Daily usage totals (any order, may include other cycles)
        cycle_start: First day of the cycle
        cycle_end: Last day of the cycle (inclusive)
        now: Reference date, defaults to today

    Returns:
        UsageProjection with projected minutes, confidence and method

    Raises:
        InvalidDateRange: If a date is unparseable or start is after end

    Example:
        >>> days = [
        ...     DailyUsage(date=dt.date(2025, 8, d), minutes_total=30)
        ...     for d in range(1, 3)
        ... ]
        >>> projection = project_cycle_usage(
        ...     days, "2025-08-01", "2025-08-31", now="2025-08-02"
        ... )
        >>> projection.minutes_total, projection.confidence.value
        (930, 'low')
    """
    start = to_datetime(cycle_start, "cycle_start")
    end = to_datetime(cycle_end, "cycle_end")
    _check_order(start, end)
    today = to_date(now, "now") if now is not None else dt.date.today()

    cycle_data = filter_cycle_data(daily, start.date(), end.date(), today)
    days_used = len(cycle_data)

    if days_used == 0:
        logger.debug("No usage recorded in cycle yet, projecting 0 minutes")
        return UsageProjection(
            minutes_total=0,
            confidence=Confidence.LOW,
            method=ProjectionMethod.LINEAR,
        )

    total_minutes_used = sum(day.minutes_total for day in cycle_data)
    total_cycle_days = count_cycle_days(start, end)

    if days_used >= total_cycle_days:
        # Cycle complete, nothing to extrapolate
        return UsageProjection(
            minutes_total=total_minutes_used,
            confidence=Confidence.HIGH,
            method=ProjectionMethod.LINEAR,
        )

    if days_used >= MOVING_AVERAGE_MIN_DAYS:
        recent = cycle_data[-MOVING_AVERAGE_WINDOW:]
        recent_minutes = Decimal(sum(day.minutes_total for day in recent))
        remaining_days = total_cycle_days - days_used
        projected = round_half_up(
            total_minutes_used
            + recent_minutes * remaining_days / MOVING_AVERAGE_WINDOW
        )
        confidence = (
            Confidence.HIGH
            if days_used >= MOVING_AVERAGE_HIGH_CONFIDENCE_DAYS
            else Confidence.MEDIUM
        )
        method = ProjectionMethod.MOVING_AVERAGE
    else:
        projected = round_half_up(
            Decimal(total_minutes_used) * total_cycle_days / days_used
        )
        confidence = (
            Confidence.MEDIUM
            if days_used >= LINEAR_MEDIUM_CONFIDENCE_DAYS
            else Confidence.LOW
        )
        method = ProjectionMethod.LINEAR

    logger.debug(
        f"Projected {projected} minutes from {days_used}/{total_cycle_days} days "
        f"({method.value}, {confidence.value})"
    )

    return UsageProjection(
        minutes_total=projected,
        confidence=confidence,
        method=method,
    )
