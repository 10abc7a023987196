"""Calculator modules for the usage core."""

from kipraxis.calculators.billing_calculator import (
    calculate_billable_minutes,
    calculate_billable_seconds,
    calculate_overage_minutes,
    parse_billing_rules,
    round_call_duration,
    round_half_up,
)
from kipraxis.calculators.calendar_calculator import (
    find_holiday_conflicts,
    generate_time_options,
    get_appointments_for_time_slot,
    get_holiday_duration,
    get_holiday_for_date,
    get_week_dates,
)
from kipraxis.calculators.projection import (
    count_cycle_days,
    filter_cycle_data,
    project_cycle_usage,
)
from kipraxis.calculators.time_utils import (
    convert_time_to_minutes,
    minutes_to_clock_time,
    parse_clock_time,
    to_date,
    to_datetime,
    to_practice_time,
)
from kipraxis.calculators.usage_stats import (
    calculate_growth_rate,
    calculate_percentage,
    generate_cycle_dates,
    is_within_business_hours,
)

__all__ = [
    # billing_calculator
    "calculate_billable_minutes",
    "calculate_billable_seconds",
    "calculate_overage_minutes",
    "parse_billing_rules",
    "round_call_duration",
    "round_half_up",
    # calendar_calculator
    "find_holiday_conflicts",
    "generate_time_options",
    "get_appointments_for_time_slot",
    "get_holiday_duration",
    "get_holiday_for_date",
    "get_week_dates",
    # projection
    "count_cycle_days",
    "filter_cycle_data",
    "project_cycle_usage",
    # time_utils
    "convert_time_to_minutes",
    "minutes_to_clock_time",
    "parse_clock_time",
    "to_date",
    "to_datetime",
    "to_practice_time",
    # usage_stats
    "calculate_growth_rate",
    "calculate_percentage",
    "generate_cycle_dates",
    "is_within_business_hours",
]
