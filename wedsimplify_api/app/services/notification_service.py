"""
Service layer for in-app notifications.

Notifications are produced as a side effect of other operations, so
``notify`` takes the caller's open cursor and writes inside the same
transaction.  The remaining methods serve the notification feed.
"""

import logging
import sqlite3
from typing import List, Optional

from wedsimplify_api.app.core.db import get_connection, insert_row, new_id, utcnow
from wedsimplify_api.app.core.exceptions import NotFoundError
from wedsimplify_api.app.schemas.notification import NotificationRead

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for reading and acknowledging notifications."""

    @staticmethod
    def notify(
        cursor: sqlite3.Cursor,
        user_id: str,
        type_: str,
        title: str,
        message: Optional[str] = None,
        related_id: Optional[str] = None,
    ) -> str:
        notification_id = new_id()
        insert_row(
            cursor,
            "notifications",
            {
                "id": notification_id,
                "user_id": user_id,
                "type": type_,
                "title": title,
                "message": message,
                "related_id": related_id,
                "is_read": False,
                "created_at": utcnow(),
            },
        )
        logger.debug("Queued %s notification for user %s", type_, user_id)
        return notification_id

    @classmethod
    async def list_notifications(cls, user_id: str, unread_only: bool = False) -> List[NotificationRead]:
        """Return the user's notifications, newest first."""
        query = "SELECT * FROM notifications WHERE user_id = ?"
        if unread_only:
            query += " AND is_read = 0"
        query += " ORDER BY created_at DESC"
        conn = get_connection()
        try:
            rows = conn.execute(query, (user_id,)).fetchall()
        finally:
            conn.close()
        return [NotificationRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def mark_read(cls, user_id: str, notification_id: str) -> NotificationRead:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE notifications SET is_read = 1 WHERE id = ? AND user_id = ?",
                (notification_id, user_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Notification not found")
            conn.commit()
            row = cursor.execute(
                "SELECT * FROM notifications WHERE id = ?", (notification_id,)
            ).fetchone()
        finally:
            conn.close()
        return NotificationRead.model_validate(dict(row))

    @classmethod
    async def mark_all_read(cls, user_id: str) -> int:
        """Mark every unread notification as read; return how many changed."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE notifications SET is_read = 1 WHERE user_id = ? AND is_read = 0",
                (user_id,),
            )
            conn.commit()
            updated = cursor.rowcount
        finally:
            conn.close()
        logger.info("Marked %d notifications read for user %s", updated, user_id)
        return updated
