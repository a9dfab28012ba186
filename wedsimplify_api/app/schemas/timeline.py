"""Pydantic models for planning timeline tasks."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel, not_null


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimelineItemCreate(CamelModel):
    title: str = Field(..., min_length=1, examples=["Book the photographer"])
    description: Optional[str] = None
    due_date: Optional[date] = None
    category: Optional[str] = Field(default=None, description="venue, catering, photography, ...")
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False


class TimelineItemUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    is_completed: Optional[bool] = None

    check_not_null = not_null("title", "priority", "is_completed")


class TimelineItemRead(CamelModel):
    id: str
    couple_id: Optional[str] = None
    individual_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    is_completed: bool = False
    category: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    created_at: datetime
    updated_at: datetime
