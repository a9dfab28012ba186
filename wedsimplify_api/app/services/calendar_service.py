"""
Service layer for vendor availability.

Each vendor has at most one availability row per calendar day,
enforced by ``UNIQUE (vendor_id, date)``.  ``set_availability`` is a
single upsert so concurrent writers for the same day cannot create
duplicates; the last writer's values win.
"""

import logging
from datetime import date
from typing import List, Optional

from wedsimplify_api.app.core.db import get_connection, new_id, utcnow
from wedsimplify_api.app.schemas.calendar import AvailabilityRead, AvailabilityUpdate

logger = logging.getLogger(__name__)


class CalendarService:
    """Service for reading and writing a vendor's calendar."""

    @classmethod
    async def get_availability(
        cls,
        vendor_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[AvailabilityRead]:
        """Rows of the vendor's calendar ordered by date, optionally bounded."""
        query = "SELECT * FROM vendor_availability WHERE vendor_id = ?"
        params: list = [vendor_id]
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date ASC"
        conn = get_connection()
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        return [AvailabilityRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def set_availability(cls, vendor_id: str, entry: AvailabilityUpdate) -> AvailabilityRead:
        """Insert or overwrite the row for ``entry.date``.

        ``entry.date`` has already been reduced to a UTC calendar day
        by the schema.  Optional text fields not supplied are cleared,
        so the stored row always reflects the latest call.
        """
        now = utcnow()
        day = entry.date.isoformat()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO vendor_availability (id, vendor_id, date, is_available, event_type,
                                                 event_title, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(vendor_id, date) DO UPDATE SET
                    is_available = excluded.is_available,
                    event_type = excluded.event_type,
                    event_title = excluded.event_title,
                    notes = excluded.notes,
                    updated_at = excluded.updated_at
                """,
                (
                    new_id(),
                    vendor_id,
                    day,
                    1 if entry.is_available else 0,
                    entry.event_type,
                    entry.event_title,
                    entry.notes,
                    now,
                    now,
                ),
            )
            conn.commit()
            row = cursor.execute(
                "SELECT * FROM vendor_availability WHERE vendor_id = ? AND date = ?",
                (vendor_id, day),
            ).fetchone()
        finally:
            conn.close()
        logger.info(
            "Vendor %s marked %s as %s", vendor_id, day, "available" if entry.is_available else "booked"
        )
        return AvailabilityRead.model_validate(dict(row))

    @classmethod
    async def list_booked_dates(cls, vendor_id: str) -> List[date]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT date FROM vendor_availability WHERE vendor_id = ? AND is_available = 0"
                " ORDER BY date ASC",
                (vendor_id,),
            ).fetchall()
        finally:
            conn.close()
        return [date.fromisoformat(row["date"]) for row in rows]
