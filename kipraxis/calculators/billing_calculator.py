"""Billing calculator for call durations.

This module implements the billing rounding policy and aggregation:
- Rounding a single call duration under the configured policy
- Summing rounded durations into billable minutes
- Computing minutes above the plan allowance

Aggregation rounds once, after summing, so batch results can differ from the
sum of per-call results by up to one minute. That is the billing behaviour
practices see on their invoices and is preserved here.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from kipraxis.errors import InvalidBillingRule
from kipraxis.models.usage import BillingRules, RoundingMode

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's ``round`` rounds halves to even; billing figures round ``x.5``
    upwards.

    Example:
        >>> round_half_up(Decimal("2.5"))
        3
        >>> round_half_up(2.4)
        2
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _rounding_mode(rules: BillingRules) -> RoundingMode:
    rounding = rules.rounding
    if isinstance(rounding, RoundingMode):
        return rounding
    try:
        return RoundingMode(rounding)
    except ValueError:
        raise InvalidBillingRule(
            f"Unknown rounding mode '{rounding}'. "
            f"Must be one of: {[m.value for m in RoundingMode]}",
            rounding=rounding,
        )


def round_call_duration(duration_sec: int, rules: BillingRules) -> int:
    """Round a raw call duration to its billable duration.

    - per_minute: round up to the next full minute (1s bills as 60s)
    - per_second: bill the exact seconds, but at least ``min_charge_sec``

    Args:
        duration_sec: Raw call duration in seconds (non-negative)
        rules: Billing rules to apply

    Returns:
        Billable duration in seconds

    Raises:
        InvalidBillingRule: If the rounding mode is unknown

    Example:
        >>> round_call_duration(61, BillingRules(rounding=RoundingMode.PER_MINUTE))
        120
        >>> round_call_duration(
        ...     10, BillingRules(rounding=RoundingMode.PER_SECOND, min_charge_sec=60)
        ... )
        60
    """
    mode = _rounding_mode(rules)

    if mode is RoundingMode.PER_MINUTE:
        return math.ceil(duration_sec / SECONDS_PER_MINUTE) * SECONDS_PER_MINUTE

    # A minimum charge of 0 is the same as no minimum charge
    if rules.min_charge_sec and duration_sec < rules.min_charge_sec:
        return rules.min_charge_sec

    return duration_sec


def calculate_billable_seconds(
    durations: Iterable[int], rules: BillingRules
) -> int:
    """Sum the rounded billable seconds of all calls."""
    return sum(round_call_duration(d, rules) for d in durations)


def calculate_billable_minutes(durations: Iterable[int], rules: BillingRules) -> int:
    """Calculate billable minutes from raw call durations.

    Every duration is rounded with :func:`round_call_duration`, the rounded
    seconds are summed, and the sum is converted to minutes and rounded to
    the nearest whole minute (halves up).

    Args:
        durations: Raw call durations in seconds
        rules: Billing rules to apply

    Returns:
        Total billable minutes (0 for no calls)

    Example:
        >>> rules = BillingRules(rounding=RoundingMode.PER_SECOND)
        >>> calculate_billable_minutes([30, 60], rules)
        2
    """
    total_seconds = calculate_billable_seconds(durations, rules)
    minutes = round_half_up(Decimal(total_seconds) / Decimal(SECONDS_PER_MINUTE))
    logger.debug(f"Billable seconds {total_seconds} -> {minutes} minutes")
    return minutes


def parse_billing_rules(data: Mapping[str, Any]) -> BillingRules:
    """Build BillingRules from a plain mapping (config file, API payload).

    Raises:
        InvalidBillingRule: If the rounding mode is unknown or a value is
            malformed, instead of silently falling back to a default
    """
    try:
        return BillingRules.model_validate(dict(data))
    except ValidationError as e:
        raise InvalidBillingRule(
            f"Invalid billing rules: {e.errors()[0]['msg']}",
            rounding=data.get("rounding"),
        ) from e


def calculate_overage_minutes(
    billable_minutes: int, rules: BillingRules
) -> Optional[int]:
    """Calculate minutes used beyond the plan allowance.

    Returns:
        Minutes above ``plan_included_minutes`` (never negative), or None
        when the rules carry no plan allowance

    Example:
        >>> rules = BillingRules(
        ...     rounding=RoundingMode.PER_MINUTE, plan_included_minutes=1000
        ... )
        >>> calculate_overage_minutes(1050, rules)
        50
    """
    if rules.plan_included_minutes is None:
        return None
    return max(0, billable_minutes - rules.plan_included_minutes)
