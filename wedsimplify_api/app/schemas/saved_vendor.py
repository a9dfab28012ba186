"""Pydantic models for a consumer's saved (favourite) vendors."""

from datetime import datetime

from .base import CamelModel
from .profile import VendorRead


class SavedVendorCreate(CamelModel):
    vendor_id: str


class SavedVendorRead(CamelModel):
    id: str
    user_id: str
    vendor_id: str
    created_at: datetime


class SavedVendorEntry(CamelModel):
    """A favourite as listed on the dashboard: when it was saved and the vendor."""

    saved_at: datetime
    vendor: VendorRead
