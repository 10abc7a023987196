"""Usage, billing and projection models.

This module defines the values the billing core consumes and produces:
- DailyUsage: total billable minutes for one calendar day
- BillingRules: rounding policy and plan configuration
- UsageProjection: estimated end-of-cycle total
- UsageTotals: rolled-up totals for a set of calls
- BillingCycle: the date window of one accounting period
"""

import datetime as dt
from enum import Enum
from typing import Dict, Optional

from pydantic import Field, model_validator

from kipraxis.models.base import BaseDataModel


class RoundingMode(str, Enum):
    """How a raw call duration is turned into a billable duration."""

    PER_MINUTE = "per_minute"
    PER_SECOND = "per_second"


class Confidence(str, Enum):
    """Confidence attached to a usage projection."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProjectionMethod(str, Enum):
    """Extrapolation used to build a usage projection."""

    LINEAR = "linear"
    MOVING_AVERAGE = "moving_average"


class DailyUsage(BaseDataModel):
    """Billable minutes recorded for a single calendar day.

    Attributes:
        date: Calendar day the minutes belong to
        minutes_total: Total billable minutes (never negative)
        minutes_inbound: Minutes of inbound calls
        minutes_outbound: Minutes of outbound calls
        calls_total: Number of calls on that day

    Example:
        >>> day = DailyUsage(date=dt.date(2025, 8, 1), minutes_total=42)
        >>> day.minutes_total
        42
    """

    date: dt.date = Field(..., description="Calendar day")
    minutes_total: int = Field(..., ge=0, description="Billable minutes")
    minutes_inbound: int = Field(0, ge=0, description="Inbound minutes")
    minutes_outbound: int = Field(0, ge=0, description="Outbound minutes")
    calls_total: int = Field(0, ge=0, description="Number of calls")


class BillingRules(BaseDataModel):
    """Billing configuration supplied by the caller.

    Attributes:
        rounding: Rounding policy for each call
        min_charge_sec: Minimum billed seconds per call (per-second mode only)
        plan_included_minutes: Minutes included in the practice's plan

    Example:
        >>> rules = BillingRules(rounding=RoundingMode.PER_SECOND, min_charge_sec=60)
        >>> rules.rounding.value
        'per_second'
    """

    rounding: RoundingMode = Field(..., description="Rounding policy")
    min_charge_sec: Optional[int] = Field(None, ge=0, description="Minimum charge")
    plan_included_minutes: Optional[int] = Field(
        None, ge=0, description="Minutes included in plan"
    )


class UsageProjection(BaseDataModel):
    """Estimated total minutes for a billing cycle.

    Attributes:
        minutes_total: Projected minutes at the end of the cycle
        confidence: How much history the projection is based on
        method: Extrapolation method that produced the estimate
    """

    minutes_total: int = Field(..., ge=0)
    confidence: Confidence
    method: ProjectionMethod


class BillingCycle(BaseDataModel):
    """Inclusive date window of one billing cycle."""

    start: dt.date
    end: dt.date

    @model_validator(mode="after")
    def validate_order(self) -> "BillingCycle":
        """Ensure the cycle does not end before it starts."""
        if self.end < self.start:
            raise ValueError(
                f"Cycle end ({self.end}) must not be before cycle start ({self.start})"
            )
        return self

    @property
    def days(self) -> int:
        """Number of calendar days in the cycle (inclusive)."""
        return (self.end - self.start).days + 1

    @property
    def name(self) -> str:
        """Short label such as ``Aug 2025`` for the month the cycle starts in."""
        return self.start.strftime("%b %Y")


class UsageTotals(BaseDataModel):
    """Rolled-up usage figures for a set of calls.

    Attributes:
        minutes_inbound: Billable minutes of inbound calls
        minutes_outbound: Billable minutes of outbound calls
        minutes_total: Billable minutes across all calls
        calls_total: Number of calls
        avg_duration_sec: Mean raw call duration in whole seconds
        after_hours_pct: Share of raw call seconds outside business hours
        minutes_by_category: Billable minutes per call category
        overage_minutes: Minutes above the plan allowance (None without a plan)
    """

    minutes_inbound: int = Field(0, ge=0)
    minutes_outbound: int = Field(0, ge=0)
    minutes_total: int = Field(0, ge=0)
    calls_total: int = Field(0, ge=0)
    avg_duration_sec: int = Field(0, ge=0)
    after_hours_pct: float = Field(0.0, ge=0.0, le=100.0)
    minutes_by_category: Dict[str, int] = Field(default_factory=dict)
    overage_minutes: Optional[int] = Field(None, ge=0)
