"""Service layer for a consumer's planning timeline."""

import logging
from typing import List

from wedsimplify_api.app.core.db import assignments, get_connection, insert_row, new_id, utcnow
from wedsimplify_api.app.core.exceptions import NotFoundError
from wedsimplify_api.app.schemas.timeline import (
    TimelineItemCreate,
    TimelineItemRead,
    TimelineItemUpdate,
)
from wedsimplify_api.app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


class TimelineService:
    """Service for timeline tasks owned by a couple or individual."""

    @classmethod
    async def list_items(cls, user_id: str) -> List[TimelineItemRead]:
        """Tasks by due date, undated tasks last, ties in creation order."""
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM timeline_items WHERE {consumer.owner_column} = ?"
                " ORDER BY due_date IS NULL, due_date ASC, created_at ASC",
                (consumer.profile_id,),
            ).fetchall()
        finally:
            conn.close()
        return [TimelineItemRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def create_item(cls, user_id: str, item: TimelineItemCreate) -> TimelineItemRead:
        consumer = await ProfileService.require_consumer(user_id)
        item_id = new_id()
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            insert_row(
                cursor,
                "timeline_items",
                {
                    "id": item_id,
                    consumer.owner_column: consumer.profile_id,
                    **item.model_dump(),
                    "created_at": now,
                    "updated_at": now,
                },
            )
            conn.commit()
            row = cursor.execute("SELECT * FROM timeline_items WHERE id = ?", (item_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Timeline item %s created", item_id)
        return TimelineItemRead.model_validate(dict(row))

    @classmethod
    async def update_item(cls, user_id: str, item_id: str, updates: TimelineItemUpdate) -> TimelineItemRead:
        """Edit a task or toggle ``is_completed``."""
        consumer = await ProfileService.require_consumer(user_id)
        values = updates.model_dump(exclude_unset=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if values:
                clause, params = assignments({**values, "updated_at": utcnow()})
                cursor.execute(
                    f"UPDATE timeline_items SET {clause} WHERE id = ? AND {consumer.owner_column} = ?",
                    (*params, item_id, consumer.profile_id),
                )
                conn.commit()
            row = cursor.execute(
                f"SELECT * FROM timeline_items WHERE id = ? AND {consumer.owner_column} = ?",
                (item_id, consumer.profile_id),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Timeline item not found")
        return TimelineItemRead.model_validate(dict(row))

    @classmethod
    async def delete_item(cls, user_id: str, item_id: str) -> None:
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"DELETE FROM timeline_items WHERE id = ? AND {consumer.owner_column} = ?",
                (item_id, consumer.profile_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Timeline item not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("Timeline item %s deleted", item_id)
