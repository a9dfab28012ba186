"""
Service layer for budget items.

Budget items belong to a consumer profile: ``couple_id`` or
``individual_id`` is set, never both.  Every statement filters on the
caller's owner column, so an id belonging to someone else behaves
exactly like an id that does not exist.
"""

import logging
from typing import List

from wedsimplify_api.app.core.db import assignments, get_connection, insert_row, new_id, utcnow
from wedsimplify_api.app.core.exceptions import NotFoundError
from wedsimplify_api.app.schemas.budget import (
    BudgetItemCreate,
    BudgetItemRead,
    BudgetItemUpdate,
    BudgetSummary,
)
from wedsimplify_api.app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


class BudgetService:
    """Service for a consumer's budget line items."""

    @classmethod
    async def list_items(cls, user_id: str) -> List[BudgetItemRead]:
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM budget_items WHERE {consumer.owner_column} = ?"
                " ORDER BY created_at DESC",
                (consumer.profile_id,),
            ).fetchall()
        finally:
            conn.close()
        return [BudgetItemRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def create_item(cls, user_id: str, item: BudgetItemCreate) -> BudgetItemRead:
        consumer = await ProfileService.require_consumer(user_id)
        item_id = new_id()
        now = utcnow()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            insert_row(
                cursor,
                "budget_items",
                {
                    "id": item_id,
                    consumer.owner_column: consumer.profile_id,
                    **item.model_dump(),
                    "created_at": now,
                    "updated_at": now,
                },
            )
            conn.commit()
            row = cursor.execute("SELECT * FROM budget_items WHERE id = ?", (item_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Budget item %s created for %s %s", item_id, consumer.role.value, consumer.profile_id)
        return BudgetItemRead.model_validate(dict(row))

    @classmethod
    async def update_item(cls, user_id: str, item_id: str, updates: BudgetItemUpdate) -> BudgetItemRead:
        consumer = await ProfileService.require_consumer(user_id)
        values = updates.model_dump(exclude_unset=True)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if values:
                clause, params = assignments({**values, "updated_at": utcnow()})
                cursor.execute(
                    f"UPDATE budget_items SET {clause} WHERE id = ? AND {consumer.owner_column} = ?",
                    (*params, item_id, consumer.profile_id),
                )
                conn.commit()
            row = cursor.execute(
                f"SELECT * FROM budget_items WHERE id = ? AND {consumer.owner_column} = ?",
                (item_id, consumer.profile_id),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Budget item not found")
        return BudgetItemRead.model_validate(dict(row))

    @classmethod
    async def delete_item(cls, user_id: str, item_id: str) -> None:
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"DELETE FROM budget_items WHERE id = ? AND {consumer.owner_column} = ?",
                (item_id, consumer.profile_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Budget item not found")
            conn.commit()
        finally:
            conn.close()
        logger.info("Budget item %s deleted", item_id)

    @classmethod
    async def summary(cls, user_id: str) -> BudgetSummary:
        """Totals over the caller's items.

        ``total_paid`` sums the actual cost (falling back to the
        estimate) of items marked paid.  ``remaining`` is the profile
        budget minus ``total_actual`` and is only given when the profile
        has a budget.
        """
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            row = conn.execute(
                f"""
                SELECT COUNT(*) AS item_count,
                       COALESCE(SUM(estimated_cost), 0) AS total_estimated,
                       COALESCE(SUM(actual_cost), 0) AS total_actual,
                       COALESCE(SUM(CASE WHEN is_paid = 1
                                         THEN COALESCE(actual_cost, estimated_cost, 0)
                                         ELSE 0 END), 0) AS total_paid
                FROM budget_items WHERE {consumer.owner_column} = ?
                """,
                (consumer.profile_id,),
            ).fetchone()
        finally:
            conn.close()
        remaining = None
        if consumer.budget is not None:
            remaining = consumer.budget - row["total_actual"]
        return BudgetSummary(**dict(row), total_budget=consumer.budget, remaining=remaining)
