"""Unit tests for usage statistics helpers."""

import datetime as dt

import pytest

from kipraxis.calculators.usage_stats import (
    calculate_growth_rate,
    calculate_percentage,
    generate_cycle_dates,
    is_within_business_hours,
)
from kipraxis.errors import InvalidTimeValue


class TestCalculatePercentage:
    def test_one_decimal_by_default(self):
        assert calculate_percentage(1, 3) == "33.3"

    def test_half_rounds_up(self):
        assert calculate_percentage(1, 8) == "12.5"
        assert calculate_percentage(1, 16) == "6.3"

    def test_zero_total(self):
        assert calculate_percentage(5, 0) == "0"

    def test_decimals(self):
        assert calculate_percentage(2, 3, decimals=2) == "66.67"


class TestCalculateGrowthRate:
    def test_growth(self):
        assert calculate_growth_rate(150, 100) == 50.0

    def test_decline(self):
        assert calculate_growth_rate(75, 100) == -25.0

    def test_from_zero(self):
        assert calculate_growth_rate(10, 0) == 100.0
        assert calculate_growth_rate(0, 0) == 0.0


class TestIsWithinBusinessHours:
    @pytest.mark.parametrize(
        "hour, minute, expected",
        [(7, 59, False), (8, 0, True), (12, 30, True), (18, 0, True), (18, 1, False)],
    )
    def test_default_hours_inclusive(self, hour, minute, expected):
        moment = dt.datetime(2025, 8, 4, hour, minute)

        assert is_within_business_hours(moment) is expected

    def test_custom_hours(self):
        moment = dt.datetime(2025, 8, 4, 7, 30)

        assert is_within_business_hours(moment, "07:00", "12:00")

    def test_invalid_hours(self):
        with pytest.raises(InvalidTimeValue):
            is_within_business_hours(dt.datetime(2025, 8, 4, 9), "8 Uhr", "18:00")


class TestGenerateCycleDates:
    def test_current_month(self):
        cycle = generate_cycle_dates("current", today=dt.date(2025, 8, 10))

        assert cycle.start == dt.date(2025, 8, 1)
        assert cycle.end == dt.date(2025, 8, 31)
        assert cycle.days == 31
        assert cycle.name == "Aug 2025"

    def test_last_month_across_year(self):
        cycle = generate_cycle_dates("last", today=dt.date(2025, 1, 15))

        assert cycle.start == dt.date(2024, 12, 1)
        assert cycle.end == dt.date(2024, 12, 31)

    def test_leap_february(self):
        cycle = generate_cycle_dates("last", today=dt.date(2024, 3, 1))

        assert cycle.end == dt.date(2024, 2, 29)
        assert cycle.days == 29

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            generate_cycle_dates("next", today=dt.date(2025, 8, 10))
