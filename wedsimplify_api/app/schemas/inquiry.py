"""
Pydantic models for consumer-to-vendor inquiries.

An inquiry starts ``pending``.  The vendor answers by moving it to
``responded``, ``accepted`` or ``declined``; nothing moves it back to
``pending``.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field

from .base import CamelModel


class InquiryStatus(str, Enum):
    PENDING = "pending"
    RESPONDED = "responded"
    ACCEPTED = "accepted"
    DECLINED = "declined"


RESPONSE_STATUSES = (InquiryStatus.RESPONDED, InquiryStatus.ACCEPTED, InquiryStatus.DECLINED)


class InquiryCreate(CamelModel):
    vendor_id: str
    # Blank messages are rejected by the service with a domain error so
    # the client receives {"message": ...} rather than a schema report.
    message: str = Field(..., examples=["Interested in your summer availability"])
    budget: Optional[float] = Field(default=None, ge=0)
    event_date: Optional[date] = None


class InquiryRespond(CamelModel):
    status: InquiryStatus
    vendor_response: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("vendorResponse", "vendor_response", "response"),
    )


class InquiryRead(CamelModel):
    id: str
    couple_id: Optional[str] = None
    individual_id: Optional[str] = None
    vendor_id: str
    message: str
    budget: Optional[float] = None
    event_date: Optional[date] = None
    status: InquiryStatus
    vendor_response: Optional[str] = None
    created_at: datetime
    updated_at: datetime
