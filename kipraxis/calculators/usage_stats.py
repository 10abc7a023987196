"""Usage statistics helpers for dashboard KPIs.

Small, pure helpers used when presenting usage figures: shares, growth
between periods, business-hours checks and billing-cycle windows.
"""

import calendar
import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Optional, Union

from kipraxis.calculators.time_utils import convert_time_to_minutes, parse_clock_time
from kipraxis.models.usage import BillingCycle

Number = Union[int, float, Decimal]

DEFAULT_BUSINESS_HOURS = ("08:00", "18:00")


def calculate_percentage(value: Number, total: Number, decimals: int = 1) -> str:
    """Express ``value`` as a percentage of ``total``.

    Returns:
        Percentage with ``decimals`` places (halves rounded up), or ``"0"``
        when total is zero

    Example:
        >>> calculate_percentage(1, 3)
        '33.3'
        >>> calculate_percentage(5, 0)
        '0'
    """
    if total == 0:
        return "0"
    pct = Decimal(str(value)) / Decimal(str(total)) * Decimal("100")
    quantum = Decimal(1).scaleb(-decimals)
    return str(pct.quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_growth_rate(current: Number, previous: Number) -> float:
    """Relative change from ``previous`` to ``current`` in percent.

    A previous value of zero yields 100 if anything was used now, else 0.

    Example:
        >>> calculate_growth_rate(150, 100)
        50.0
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (float(current) - float(previous)) / float(previous) * 100


def is_within_business_hours(
    moment: dt.datetime,
    start: str = DEFAULT_BUSINESS_HOURS[0],
    end: str = DEFAULT_BUSINESS_HOURS[1],
) -> bool:
    """Check whether a timestamp falls within business hours (inclusive).

    Args:
        moment: Local timestamp to check
        start: Opening time as ``HH:MM``
        end: Closing time as ``HH:MM``

    Raises:
        InvalidTimeValue: If start or end is not a valid ``HH:MM`` string
    """
    minute_of_day = convert_time_to_minutes(moment.time())
    return parse_clock_time(start) <= minute_of_day <= parse_clock_time(end)


def generate_cycle_dates(
    kind: Literal["current", "last"], today: Optional[dt.date] = None
) -> BillingCycle:
    """Return the calendar-month billing cycle for this or last month.

    Example:
        >>> generate_cycle_dates("last", today=dt.date(2025, 1, 15))
        BillingCycle(start=datetime.date(2024, 12, 1), end=datetime.date(2024, 12, 31))
    """
    if kind not in ("current", "last"):
        raise ValueError(f"Cycle must be 'current' or 'last', got '{kind}'")

    today = today or dt.date.today()
    year, month = today.year, today.month

    if kind == "last":
        if month == 1:
            year, month = year - 1, 12
        else:
            month -= 1

    last_day = calendar.monthrange(year, month)[1]
    return BillingCycle(start=dt.date(year, month, 1), end=dt.date(year, month, last_day))
