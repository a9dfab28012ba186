"""
Pydantic models for the vendor directory.

Covers search filters, priced packages, portfolio items and the
aggregated detail view returned by ``GET /api/vendors/{id}``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .base import CamelModel, not_null
from .profile import VendorRead


class VendorFilter(CamelModel):
    """Directory search filters.  Every field is optional."""

    category: Optional[str] = None
    location: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_price_range(self) -> "VendorFilter":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("minPrice must not exceed maxPrice")
        return self


class PackageCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["Full day coverage"])
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    duration: Optional[str] = Field(default=None, examples=["8 hours"])
    features: List[str] = Field(default_factory=list)


class PackageUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[str] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None

    check_not_null = not_null("name", "price", "is_active")


class PackageRead(CamelModel):
    id: str
    vendor_id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime


class PortfolioItemRead(CamelModel):
    id: str
    vendor_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: str
    order_index: int = 0
    created_at: datetime


class VendorDetail(VendorRead):
    """A vendor with its active packages and display-ordered portfolio."""

    packages: List[PackageRead] = Field(default_factory=list)
    portfolio: List[PortfolioItemRead] = Field(default_factory=list)
    # Only set when the request is authenticated.
    is_saved: Optional[bool] = None
