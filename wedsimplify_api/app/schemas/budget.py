"""Pydantic models for budget line items."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, not_null


class BudgetItemCreate(CamelModel):
    category: str = Field(..., min_length=1, examples=["Photography"])
    description: str = Field(..., min_length=1)
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    actual_cost: Optional[float] = Field(default=None, ge=0)
    is_paid: bool = False
    notes: Optional[str] = None


class BudgetItemUpdate(CamelModel):
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    actual_cost: Optional[float] = Field(default=None, ge=0)
    is_paid: Optional[bool] = None
    notes: Optional[str] = None

    check_not_null = not_null("category", "description", "is_paid")


class BudgetItemRead(CamelModel):
    id: str
    couple_id: Optional[str] = None
    individual_id: Optional[str] = None
    category: str
    description: str
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    is_paid: bool = False
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BudgetSummary(CamelModel):
    """Totals over the caller's budget items.

    ``total_budget`` and ``remaining`` come from the profile's own
    ``budget`` field and are ``None`` when it is not set.
    """

    item_count: int
    total_estimated: float
    total_actual: float
    total_paid: float
    total_budget: Optional[float] = None
    remaining: Optional[float] = None
