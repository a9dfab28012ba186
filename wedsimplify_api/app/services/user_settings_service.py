"""
Service layer for per-user preferences.

A user has no ``user_settings`` row until the first update; until
then the defaults of ``UserSettingsRead`` are reported.  Updates are
an upsert that only touches the supplied flags.
"""

import logging

from wedsimplify_api.app.core.db import get_connection, to_db, transaction, utcnow
from wedsimplify_api.app.schemas.settings import UserSettingsRead, UserSettingsUpdate

logger = logging.getLogger(__name__)


class UserSettingsService:
    """Service for reading and changing a user's preference flags."""

    @classmethod
    async def get_settings(cls, user_id: str) -> UserSettingsRead:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM user_settings WHERE user_id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return UserSettingsRead(user_id=user_id)
        return UserSettingsRead.model_validate(dict(row))

    @classmethod
    async def update_settings(cls, user_id: str, updates: UserSettingsUpdate) -> UserSettingsRead:
        """Merge ``updates`` into the stored (or default) settings.

        The read and the upsert share one write transaction, so two
        concurrent partial updates both land.
        """
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        with transaction() as cursor:
            row = cursor.execute("SELECT * FROM user_settings WHERE user_id = ?", (user_id,)).fetchone()
            current = UserSettingsRead.model_validate(dict(row)) if row else UserSettingsRead(user_id=user_id)
            merged = current.model_copy(update=changes)
            cursor.execute(
                """
                INSERT INTO user_settings (user_id, email_notifications, inquiry_alerts,
                                           marketing_emails, sms_notifications, timezone, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    email_notifications = excluded.email_notifications,
                    inquiry_alerts = excluded.inquiry_alerts,
                    marketing_emails = excluded.marketing_emails,
                    sms_notifications = excluded.sms_notifications,
                    timezone = excluded.timezone,
                    updated_at = excluded.updated_at
                """,
                (
                    user_id,
                    to_db(merged.email_notifications),
                    to_db(merged.inquiry_alerts),
                    to_db(merged.marketing_emails),
                    to_db(merged.sms_notifications),
                    merged.timezone,
                    utcnow(),
                ),
            )
        logger.info("Settings updated for user %s", user_id)
        return await cls.get_settings(user_id)
