"""Call record model.

A CallRecord is one handled phone call as produced by the call-handling
backend. Only the fields needed for usage rollups are modelled.
"""

import datetime as dt
from enum import Enum
from typing import Literal, Optional

from pydantic import Field, field_validator

from kipraxis.models.base import BaseDataModel


class CallCategory(str, Enum):
    """Topic the caller was routed to."""

    APPOINTMENT = "appointment"
    RECEIPT = "receipt"
    SICK_NOTE = "sick_note"
    INFO = "info"
    OTHER = "other"
    UNKNOWN = "unknown"


class CallStatus(str, Enum):
    """Outcome of a handled call."""

    BOOKING_MADE = "booking_made"
    ACTION_NEEDED = "action_needed"
    COMPLETED = "completed"
    FAILED = "failed"


class CallRecord(BaseDataModel):
    """A single handled call.

    Attributes:
        id: Call identifier
        started_at: When the call started
        duration_sec: Raw call duration in seconds
        direction: 'inbound' or 'outbound'
        category: Topic of the call
        status: Outcome of the call
        caller_name: Optional caller display name

    Example:
        >>> call = CallRecord(
        ...     id="c-1",
        ...     started_at=dt.datetime(2025, 8, 4, 9, 15),
        ...     duration_sec=95,
        ...     direction="inbound",
        ... )
        >>> call.started_at.date()
        datetime.date(2025, 8, 4)
    """

    id: str = Field(..., min_length=1)
    started_at: dt.datetime
    duration_sec: int = Field(..., ge=0)
    direction: Literal["inbound", "outbound"]
    category: CallCategory = CallCategory.UNKNOWN
    status: CallStatus = CallStatus.COMPLETED
    caller_name: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("id cannot be empty or whitespace")
        return v.strip()
