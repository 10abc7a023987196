"""Unit tests for cycle usage projection.

This module tests:
- Empty cycles and fully elapsed cycles
- The linear branch and its confidence breakpoints (fewer than 7 days)
- The 7-day moving average branch (last seven days, remaining days)
- Filtering of entries outside the elapsed cycle window
- Date parsing and range errors
"""

import datetime as dt
import random

import pytest

from kipraxis.calculators.projection import (
    count_cycle_days,
    filter_cycle_data,
    project_cycle_usage,
)
from kipraxis.errors import InvalidDateRange
from kipraxis.models.usage import Confidence, DailyUsage, ProjectionMethod


def _days(minutes_by_day, month=8, year=2025):
    return [
        DailyUsage(date=dt.date(year, month, day), minutes_total=minutes)
        for day, minutes in minutes_by_day.items()
    ]


class TestCountCycleDays:
    """Test cycle length calculation."""

    def test_end_date_is_inclusive(self):
        assert count_cycle_days("2025-08-01", "2025-08-31") == 31

    def test_end_of_day_timestamp(self):
        assert count_cycle_days("2025-08-01T00:00:00", "2025-08-31T23:59:59") == 31

    def test_february(self):
        assert count_cycle_days(dt.date(2025, 2, 1), dt.date(2025, 2, 28)) == 28

    def test_single_day_cycle(self):
        assert count_cycle_days("2025-08-01", "2025-08-01") == 1

    def test_start_after_end(self):
        with pytest.raises(InvalidDateRange):
            count_cycle_days("2025-08-31", "2025-08-01")


class TestFilterCycleData:
    """Test selection of elapsed cycle days."""

    def test_excludes_outside_and_future_days(self):
        daily = [
            DailyUsage(date=dt.date(2025, 7, 31), minutes_total=99),
            DailyUsage(date=dt.date(2025, 8, 3), minutes_total=1),
            DailyUsage(date=dt.date(2025, 8, 1), minutes_total=2),
            DailyUsage(date=dt.date(2025, 8, 4), minutes_total=3),
            DailyUsage(date=dt.date(2025, 9, 1), minutes_total=99),
        ]

        result = filter_cycle_data(
            daily, dt.date(2025, 8, 1), dt.date(2025, 8, 31), dt.date(2025, 8, 3)
        )

        assert [d.date.day for d in result] == [1, 3]


class TestProjectCycleUsage:
    """Test the projection algorithm."""

    def test_empty_input(self):
        projection = project_cycle_usage([], "2025-08-01", "2025-08-31", now="2025-08-05")

        assert projection.minutes_total == 0
        assert projection.confidence is Confidence.LOW
        assert projection.method is ProjectionMethod.LINEAR

    def test_no_entries_inside_window(self):
        daily = _days({1: 50}, month=7)

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-05")

        assert projection.minutes_total == 0
        assert projection.confidence is Confidence.LOW

    def test_cycle_not_started_yet(self):
        daily = _days({1: 50, 2: 60})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-07-20")

        assert projection.minutes_total == 0

    def test_full_cycle_elapsed_returns_exact_sum(self, august_alternating_usage):
        projection = project_cycle_usage(
            august_alternating_usage, "2025-08-01", "2025-08-31", now="2025-09-05"
        )

        assert projection.minutes_total == sum(
            d.minutes_total for d in august_alternating_usage
        )
        assert projection.confidence is Confidence.HIGH
        assert projection.method is ProjectionMethod.LINEAR

    def test_linear_low_confidence(self):
        daily = _days({1: 30, 2: 30})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-02")

        assert projection.minutes_total == 930  # 30/day * 31 days
        assert projection.confidence is Confidence.LOW
        assert projection.method is ProjectionMethod.LINEAR

    def test_linear_medium_confidence_from_three_days(self):
        daily = _days({1: 10, 2: 20, 3: 30})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-03")

        assert projection.minutes_total == 620  # 20/day * 31 days
        assert projection.confidence is Confidence.MEDIUM
        assert projection.method is ProjectionMethod.LINEAR

    def test_linear_six_days_still_linear(self):
        daily = _days({d: 10 for d in range(1, 7)})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-06")

        assert projection.method is ProjectionMethod.LINEAR
        assert projection.minutes_total == 310

    def test_linear_rounds_half_up(self):
        # 1 minute over 2 days, 5-day cycle: 0.5 * 5 = 2.5
        daily = _days({1: 1, 2: 0})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-05", now="2025-08-02")

        assert projection.minutes_total == 3

    def test_moving_average_uses_last_seven_days(self):
        daily = _days({d: d * 10 for d in range(1, 11)})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-10")

        # used 550; days 4..10 average 70; 21 remaining days
        assert projection.minutes_total == 550 + 70 * 21
        assert projection.method is ProjectionMethod.MOVING_AVERAGE
        assert projection.confidence is Confidence.MEDIUM

    def test_moving_average_starts_at_seven_days(self):
        daily = _days({d: 10 for d in range(1, 8)})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-07")

        assert projection.method is ProjectionMethod.MOVING_AVERAGE
        assert projection.confidence is Confidence.MEDIUM
        assert projection.minutes_total == 70 + 10 * 24

    def test_moving_average_high_confidence_from_fourteen_days(self):
        daily = _days({d: 10 for d in range(1, 15)})

        projection = project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-14")

        assert projection.minutes_total == 310
        assert projection.confidence is Confidence.HIGH
        assert projection.method is ProjectionMethod.MOVING_AVERAGE

    def test_august_alternating_scenario(self, august_alternating_usage):
        """Ten elapsed days of a 31-day cycle alternating 20/40 minutes."""
        projection = project_cycle_usage(
            august_alternating_usage, "2025-08-01", "2025-08-31", now="2025-08-10"
        )

        used = 5 * 20 + 5 * 40
        last_seven = [40, 20, 40, 20, 40, 20, 40]  # days 4..10
        expected = used + sum(last_seven) / 7 * 21

        assert projection.method is ProjectionMethod.MOVING_AVERAGE
        assert projection.confidence is Confidence.MEDIUM
        assert projection.minutes_total == round(expected) == 960

    def test_input_order_does_not_matter(self):
        daily = _days({d: d * 10 for d in range(1, 11)})
        shuffled = daily[:]
        random.Random(7).shuffle(shuffled)

        assert project_cycle_usage(
            shuffled, "2025-08-01", "2025-08-31", now="2025-08-10"
        ) == project_cycle_usage(daily, "2025-08-01", "2025-08-31", now="2025-08-10")

    @pytest.mark.parametrize("elapsed", [1, 2, 5, 7, 10, 20, 30])
    def test_projection_never_below_minutes_used(self, elapsed):
        daily = _days({d: (d * 37) % 50 for d in range(1, 32)})

        projection = project_cycle_usage(
            daily, "2025-08-01", "2025-08-31", now=dt.date(2025, 8, elapsed)
        )

        used = sum(d.minutes_total for d in daily[:elapsed])
        assert projection.minutes_total >= used

    def test_accepts_iso_timestamps(self):
        daily = _days({1: 30, 2: 30})

        projection = project_cycle_usage(
            daily,
            "2025-08-01T00:00:00.000Z",
            "2025-08-31T00:00:00.000Z",
            now=dt.datetime(2025, 8, 2, 15, 30),
        )

        assert projection.minutes_total == 930

    def test_defaults_now_to_today(self):
        today = dt.date.today()
        daily = [DailyUsage(date=today, minutes_total=10)]

        projection = project_cycle_usage(daily, today, today)

        assert projection.minutes_total == 10
        assert projection.confidence is Confidence.HIGH

    def test_start_after_end_raises(self):
        with pytest.raises(InvalidDateRange) as exc_info:
            project_cycle_usage([], "2025-08-31", "2025-08-01", now="2025-08-05")

        assert "after" in str(exc_info.value)

    @pytest.mark.parametrize("bad", ["not-a-date", "2025-13-01", "", 20250801])
    def test_unparseable_dates_raise(self, bad):
        with pytest.raises(InvalidDateRange):
            project_cycle_usage([], bad, "2025-08-31")

    def test_invalid_date_range_is_value_error(self):
        with pytest.raises(ValueError):
            project_cycle_usage([], "2025-08-31", "garbage")
