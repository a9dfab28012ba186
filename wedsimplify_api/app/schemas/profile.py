"""
Pydantic models for the role-specific profiles.

A user owns at most one profile, in the table matching ``users.role``:

* ``couple`` – wedding planning attributes (partner, date, budget, venue);
* ``individual`` – a single consumer planning some other event;
* ``vendor`` – a business listing shown in the directory.

``*Create`` models validate the fields submitted during profile setup,
``*Update`` models carry partial edits (every field optional) and
``*Read`` models are what the API returns as ``roleData``.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, ConfigDict, Field

from .base import CamelModel, not_null


class CoupleCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    couple_name: str = Field(..., min_length=1, examples=["Alex & Sam"])
    contact_email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("contactEmail", "contact_email", "email"),
    )
    partner_name: Optional[str] = None
    wedding_date: Optional[date] = None
    budget: Optional[float] = Field(default=None, ge=0)
    venue: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, ge=0)
    style: Optional[str] = Field(default=None, description="rustic, elegant, modern, ...")
    location: Optional[str] = None


class CoupleUpdate(CamelModel):
    couple_name: Optional[str] = Field(default=None, min_length=1)
    contact_email: Optional[str] = None
    partner_name: Optional[str] = None
    wedding_date: Optional[date] = None
    budget: Optional[float] = Field(default=None, ge=0)
    spent_amount: Optional[float] = Field(default=None, ge=0)
    venue: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, ge=0)
    style: Optional[str] = None
    location: Optional[str] = None

    check_not_null = not_null("couple_name", "spent_amount")


class CoupleRead(CamelModel):
    id: str
    user_id: str
    couple_name: str
    contact_email: Optional[str] = None
    partner_name: Optional[str] = None
    wedding_date: Optional[date] = None
    budget: Optional[float] = None
    spent_amount: float = 0
    venue: Optional[str] = None
    guest_count: Optional[int] = None
    style: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class IndividualCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1)
    contact_email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("contactEmail", "contact_email", "email"),
    )
    phone: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    budget: Optional[float] = Field(default=None, ge=0)


class IndividualUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    budget: Optional[float] = Field(default=None, ge=0)

    check_not_null = not_null("full_name")


class IndividualRead(CamelModel):
    id: str
    user_id: str
    full_name: str
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    budget: Optional[float] = None
    created_at: datetime
    updated_at: datetime


class VendorCreate(CamelModel):
    """Fields required to list a business in the directory."""

    model_config = ConfigDict(str_strip_whitespace=True)

    business_name: str = Field(..., min_length=1, examples=["Luma Photography"])
    category: str = Field(..., min_length=1, examples=["Photography"])
    description: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    # Free-text location used by directory search; built from
    # city/state/country when omitted.
    location: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    tiktok: Optional[str] = None
    pinterest: Optional[str] = None


class VendorUpdate(CamelModel):
    """Partial vendor edit.  Rating and review count are not client-writable."""

    business_name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    tiktok: Optional[str] = None
    pinterest: Optional[str] = None
    is_active: Optional[bool] = None

    check_not_null = not_null("business_name", "category", "is_active")


class VendorRead(CamelModel):
    id: str
    user_id: str
    business_name: str
    category: str
    description: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    tiktok: Optional[str] = None
    pinterest: Optional[str] = None
    rating: float = 0
    review_count: int = 0
    is_active: bool = True
    created_at: datetime
    updated_at: datetime
