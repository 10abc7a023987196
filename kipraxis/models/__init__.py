"""Data models for the usage core.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- DailyUsage, BillingRules, UsageProjection, UsageTotals, BillingCycle
- CallRecord: a handled phone call
- Holiday, Appointment: calendar entries
"""

from kipraxis.models.base import BaseDataModel
from kipraxis.models.calendar import Appointment, Holiday
from kipraxis.models.call import CallCategory, CallRecord, CallStatus
from kipraxis.models.usage import (
    BillingCycle,
    BillingRules,
    Confidence,
    DailyUsage,
    ProjectionMethod,
    RoundingMode,
    UsageProjection,
    UsageTotals,
)

__all__ = [
    "BaseDataModel",
    "Appointment",
    "Holiday",
    "CallCategory",
    "CallRecord",
    "CallStatus",
    "BillingCycle",
    "BillingRules",
    "Confidence",
    "DailyUsage",
    "ProjectionMethod",
    "RoundingMode",
    "UsageProjection",
    "UsageTotals",
]
