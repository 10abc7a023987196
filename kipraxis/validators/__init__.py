"""Validation layer for call windows, date ranges and usage series."""

from kipraxis.validators.usage_validator import UsageValidator
from kipraxis.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)
from kipraxis.validators.window_validators import (
    WindowCheck,
    WindowRejection,
    is_valid_call_window,
    validate_date_range,
)

__all__ = [
    "UsageValidator",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "WindowCheck",
    "WindowRejection",
    "is_valid_call_window",
    "validate_date_range",
]
