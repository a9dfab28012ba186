"""
Pydantic models for the vendor availability calendar.

Availability is tracked per calendar day.  Clients often send a full
timestamp (``2025-06-01T00:00:00.000Z`` from ``Date.toISOString()``),
so incoming values are normalised with ``to_calendar_day``: a bare
date is kept as is, a datetime is converted to UTC (naive values are
taken to be UTC already) and truncated to its date.  This keeps the
one-row-per-vendor-per-day rule independent of the client's clock.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import Field, field_validator

from .base import CamelModel

# Alias so the ``date`` field name does not shadow the type.
Day = date


def to_calendar_day(value: Any) -> date:
    """Normalise a date, datetime or ISO string to a UTC calendar day."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
    else:
        raise ValueError("date must be an ISO date or datetime string")
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class AvailabilityUpdate(CamelModel):
    date: Day
    is_available: bool
    event_type: Optional[str] = Field(default=None, examples=["Wedding"])
    event_title: Optional[str] = Field(default=None, examples=["Smith Wedding"])
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalise_date(cls, value: Any) -> date:
        return to_calendar_day(value)


class AvailabilityRead(CamelModel):
    id: str
    vendor_id: str
    date: Day
    is_available: bool
    event_type: Optional[str] = None
    event_title: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
