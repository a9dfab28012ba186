"""
Business logic for users.

Users are never registered through this API.  A row is created the
first time the identity provider vouches for someone (``upsert_user``
on login) and refreshed on every later login.  The role is changed
only by profile setup.
"""

import logging
import sqlite3
from typing import Any, Dict, Optional

from wedsimplify_api.app.core.db import get_connection, utcnow
from wedsimplify_api.app.core.exceptions import ConflictError, NotFoundError
from wedsimplify_api.app.schemas.user import UserRead

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "id, email, first_name, last_name, profile_image_url, role, "
    "auth_provider, provider_id, created_at, updated_at"
)


class UserService:
    """Service for user rows keyed by the identity provider's subject id."""

    @classmethod
    async def upsert_user(cls, claims: Dict[str, Any]) -> UserRead:
        """Insert or refresh the user described by identity token claims.

        The ``sub`` claim is the primary key.  On conflict the basic
        profile claims are overwritten but ``role`` is left untouched,
        so logging in again never undoes profile setup.
        """
        user_id = str(claims["sub"])
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO users (id, email, first_name, last_name, profile_image_url,
                                       auth_provider, provider_id, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        email = excluded.email,
                        first_name = excluded.first_name,
                        last_name = excluded.last_name,
                        profile_image_url = excluded.profile_image_url,
                        auth_provider = excluded.auth_provider,
                        provider_id = excluded.provider_id,
                        updated_at = excluded.updated_at
                    """,
                    (
                        user_id,
                        claims.get("email"),
                        claims.get("first_name"),
                        claims.get("last_name"),
                        claims.get("profile_image_url"),
                        claims.get("provider", "oidc"),
                        claims.get("provider_id", user_id),
                        now,
                        now,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                # users.email is unique; another subject already holds it.
                logger.warning("Login for %s rejected: %s", user_id, exc)
                raise ConflictError("Email is already registered to another account") from exc
            conn.commit()
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        finally:
            conn.close()
        logger.info("Upserted user %s", user_id)
        return UserRead.model_validate(dict(row))

    @classmethod
    async def get_user(cls, user_id: str) -> Optional[UserRead]:
        """Retrieve a user by id, or ``None``."""
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        finally:
            conn.close()
        return UserRead.model_validate(dict(row)) if row else None

    @classmethod
    async def require_user(cls, user_id: str) -> UserRead:
        user = await cls.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @classmethod
    async def delete_user(cls, user_id: str) -> None:
        """Delete a user and, through cascading foreign keys, everything they own."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("User not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("Deleted user %s and dependent records", user_id)
