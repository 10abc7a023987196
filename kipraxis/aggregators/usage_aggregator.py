"""Usage aggregator for rolling call records up into usage figures.

This module turns raw call records into the values the usage page shows:
- One DailyUsage row per calendar day with calls
- Cycle totals: inbound/outbound/total billable minutes, call count,
  average duration, after-hours share and minutes per category
- Minutes above the plan allowance

Every minute figure is computed with the billing rounding rules, so the
inbound and outbound minutes of a day can differ from its total by one
minute: each figure is rounded once after summing its own calls.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Tuple

import pandas as pd

from kipraxis.calculators.billing_calculator import (
    calculate_billable_minutes,
    calculate_overage_minutes,
    round_half_up,
)
from kipraxis.calculators.time_utils import DEFAULT_TIMEZONE, to_practice_time
from kipraxis.calculators.usage_stats import (
    DEFAULT_BUSINESS_HOURS,
    is_within_business_hours,
)
from kipraxis.models.call import CallRecord
from kipraxis.models.usage import BillingRules, DailyUsage, UsageTotals

logger = logging.getLogger(__name__)

_COLUMNS = ["date", "duration_sec", "direction", "category", "after_hours"]


class UsageAggregator:
    """Aggregates call records into daily usage and cycle totals.

    Attributes:
        rules: Billing rules applied to every call
        business_hours: (start, end) as ``HH:MM``; calls starting outside
            count towards the after-hours share
        timezone: Practice time zone; timezone-aware call timestamps are
            converted to it before they are assigned to a day or checked
            against business hours

    Example:
        >>> aggregator = UsageAggregator(BillingRules(rounding="per_minute"))
        >>> daily = aggregator.build_daily_usage(calls)
        >>> totals = aggregator.summarize(calls)
    """

    def __init__(
        self,
        rules: BillingRules,
        business_hours: Tuple[str, str] = DEFAULT_BUSINESS_HOURS,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self.rules = rules
        self.business_hours = business_hours
        self.timezone = timezone

    def _to_dataframe(self, calls: Sequence[CallRecord]) -> pd.DataFrame:
        start, end = self.business_hours
        rows = []
        for call in calls:
            local_start = to_practice_time(call.started_at, self.timezone)
            rows.append(
                {
                    "date": local_start.date(),
                    "duration_sec": call.duration_sec,
                    "direction": call.direction,
                    "category": call.category.value,
                    "after_hours": not is_within_business_hours(local_start, start, end),
                }
            )
        return pd.DataFrame(rows, columns=_COLUMNS)

    def _billable(self, durations: pd.Series) -> int:
        return calculate_billable_minutes(durations.astype(int).tolist(), self.rules)

    def build_daily_usage(self, calls: Sequence[CallRecord]) -> List[DailyUsage]:
        """Roll calls up into one DailyUsage per day, oldest first.

        Days without calls are not emitted.
        """
        logger.info(f"Building daily usage from {len(calls)} calls")
        df = self._to_dataframe(calls)
        if df.empty:
            return []

        daily: List[DailyUsage] = []
        for day, group in df.groupby("date", sort=True):
            durations = group["duration_sec"]
            direction = group["direction"]
            daily.append(
                DailyUsage(
                    date=day,
                    minutes_total=self._billable(durations),
                    minutes_inbound=self._billable(durations[direction == "inbound"]),
                    minutes_outbound=self._billable(durations[direction == "outbound"]),
                    calls_total=len(group),
                )
            )

        logger.info(f"Built {len(daily)} daily usage rows")
        return daily

    def summarize(self, calls: Sequence[CallRecord]) -> UsageTotals:
        """Compute cycle totals for a set of calls."""
        df = self._to_dataframe(calls)
        if df.empty:
            return UsageTotals(
                overage_minutes=calculate_overage_minutes(0, self.rules),
            )

        durations = df["duration_sec"]
        minutes_total = self._billable(durations)

        total_seconds = int(durations.sum())
        after_hours_seconds = int(durations[df["after_hours"]].sum())
        after_hours_pct = (
            float(
                (Decimal(after_hours_seconds) * 100 / Decimal(total_seconds)).quantize(
                    Decimal("0.1"), rounding=ROUND_HALF_UP
                )
            )
            if total_seconds
            else 0.0
        )

        by_category = {
            category: self._billable(group["duration_sec"])
            for category, group in df.groupby("category", sort=True)
        }

        totals = UsageTotals(
            minutes_inbound=self._billable(durations[df["direction"] == "inbound"]),
            minutes_outbound=self._billable(durations[df["direction"] == "outbound"]),
            minutes_total=minutes_total,
            calls_total=len(df),
            avg_duration_sec=round_half_up(Decimal(total_seconds) / len(df)),
            after_hours_pct=after_hours_pct,
            minutes_by_category=by_category,
            overage_minutes=calculate_overage_minutes(minutes_total, self.rules),
        )
        logger.info(
            f"Summarized {totals.calls_total} calls: {totals.minutes_total} billable minutes"
        )
        return totals
