"""Calendar models: practice holidays and booked appointments."""

import datetime as dt
from typing import Literal, Optional

from pydantic import Field, model_validator

from kipraxis.models.base import BaseDataModel


class Holiday(BaseDataModel):
    """A day or span of days on which the practice is closed.

    Attributes:
        start: First closed day
        end: Last closed day (None for a single-day holiday)
        note: Optional label shown in the calendar
    """

    start: dt.date
    end: Optional[dt.date] = None
    note: Optional[str] = None

    @model_validator(mode="after")
    def validate_span(self) -> "Holiday":
        """Ensure the holiday does not end before it starts."""
        if self.end is not None and self.end < self.start:
            raise ValueError(
                f"Holiday end ({self.end}) must not be before start ({self.start})"
            )
        return self

    @property
    def last_day(self) -> dt.date:
        return self.end if self.end is not None else self.start

    def covers(self, day: dt.date) -> bool:
        """Return True if ``day`` falls inside the holiday (inclusive)."""
        return self.start <= day <= self.last_day


class Appointment(BaseDataModel):
    """A booked appointment shown in the calendar grid.

    Attributes:
        id: Appointment identifier
        title: Display title
        start: Start timestamp
        end: End timestamp (strictly after start)
        patient_name: Optional patient name
        service: Optional service booked
        source: Booking system the appointment came from
    """

    id: str = Field(..., min_length=1)
    title: str = ""
    start: dt.datetime
    end: dt.datetime
    patient_name: Optional[str] = None
    service: Optional[str] = None
    source: Literal["doctolib", "native"] = "native"

    @model_validator(mode="after")
    def validate_times(self) -> "Appointment":
        """Ensure the appointment ends after it starts."""
        if self.end <= self.start:
            raise ValueError(
                f"end ({self.end}) must be after start ({self.start})"
            )
        return self
