"""
Pydantic models for in-app notifications.

Notifications are written by the server when something happens to a
user's data (a new inquiry for a vendor, a vendor's answer for a
consumer).  Clients only read them and flip the ``isRead`` flag.
"""

from datetime import datetime
from typing import Optional

from .base import CamelModel


class NotificationRead(CamelModel):
    id: str
    user_id: str
    type: str
    title: str
    message: Optional[str] = None
    related_id: Optional[str] = None
    is_read: bool = False
    created_at: datetime
