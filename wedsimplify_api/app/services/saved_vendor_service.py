"""Service layer for a user's saved vendors."""

import logging
from typing import List

from wedsimplify_api.app.core.db import get_connection, new_id, utcnow
from wedsimplify_api.app.core.exceptions import NotFoundError
from wedsimplify_api.app.schemas.profile import VendorRead
from wedsimplify_api.app.schemas.saved_vendor import SavedVendorEntry, SavedVendorRead

logger = logging.getLogger(__name__)


class SavedVendorService:
    """Saving a vendor is idempotent: ``UNIQUE (user_id, vendor_id)`` keeps one row."""

    @classmethod
    async def save_vendor(cls, user_id: str, vendor_id: str) -> SavedVendorRead:
        """Save ``vendor_id`` for the user and return the (possibly existing) row."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if cursor.execute("SELECT 1 FROM vendors WHERE id = ?", (vendor_id,)).fetchone() is None:
                raise NotFoundError("Vendor not found")
            cursor.execute(
                "INSERT INTO saved_vendors (id, user_id, vendor_id, created_at) VALUES (?, ?, ?, ?)"
                " ON CONFLICT(user_id, vendor_id) DO NOTHING",
                (new_id(), user_id, vendor_id, utcnow()),
            )
            created = cursor.rowcount > 0
            conn.commit()
            row = cursor.execute(
                "SELECT * FROM saved_vendors WHERE user_id = ? AND vendor_id = ?",
                (user_id, vendor_id),
            ).fetchone()
        finally:
            conn.close()
        if created:
            logger.info("User %s saved vendor %s", user_id, vendor_id)
        return SavedVendorRead.model_validate(dict(row))

    @classmethod
    async def list_saved_vendors(cls, user_id: str) -> List[SavedVendorEntry]:
        """Saved vendors with their profiles, most recently saved first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT s.created_at AS saved_at, v.* FROM saved_vendors s"
                " JOIN vendors v ON v.id = s.vendor_id"
                " WHERE s.user_id = ? ORDER BY s.created_at DESC",
                (user_id,),
            ).fetchall()
        finally:
            conn.close()
        entries = []
        for row in rows:
            data = dict(row)
            saved_at = data.pop("saved_at")
            entries.append(SavedVendorEntry(saved_at=saved_at, vendor=VendorRead.model_validate(data)))
        return entries

    @classmethod
    async def remove_saved_vendor(cls, user_id: str, vendor_id: str) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM saved_vendors WHERE user_id = ? AND vendor_id = ?",
                (user_id, vendor_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Saved vendor not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s removed saved vendor %s", user_id, vendor_id)
