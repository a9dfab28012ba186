"""Pydantic models for per-user preference flags."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserSettingsRead(CamelModel):
    user_id: str
    email_notifications: bool = True
    inquiry_alerts: bool = True
    marketing_emails: bool = False
    sms_notifications: bool = False
    timezone: str = "UTC"
    updated_at: Optional[datetime] = None


class UserSettingsUpdate(CamelModel):
    email_notifications: Optional[bool] = None
    inquiry_alerts: Optional[bool] = None
    marketing_emails: Optional[bool] = None
    sms_notifications: Optional[bool] = None
    timezone: Optional[str] = Field(default=None, min_length=1, examples=["Europe/Lisbon"])
