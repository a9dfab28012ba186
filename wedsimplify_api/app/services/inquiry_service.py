"""
Service layer for the consumer-to-vendor inquiry workflow.

An inquiry is created ``pending`` by a couple or individual and
answered by the vendor it was sent to.  Answering moves it to
``responded``, ``accepted`` or ``declined``; answering again simply
overwrites the previous answer.  Each step leaves a notification for
the other party, written in the same transaction as the change.
"""

import logging
from typing import List, Optional

from wedsimplify_api.app.core.db import get_connection, insert_row, new_id, transaction, utcnow
from wedsimplify_api.app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from wedsimplify_api.app.schemas.inquiry import (
    InquiryCreate,
    InquiryRead,
    InquiryStatus,
    RESPONSE_STATUSES,
)
from wedsimplify_api.app.services.notification_service import NotificationService
from wedsimplify_api.app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

# Resolves the user behind the consumer side of an inquiry.
CONSUMER_USER_SQL = """
    SELECT COALESCE(
        (SELECT user_id FROM couples WHERE id = ?),
        (SELECT user_id FROM individuals WHERE id = ?)
    ) AS user_id
"""


class InquiryService:
    """Service for creating, answering and listing inquiries."""

    @classmethod
    async def create_inquiry(cls, user_id: str, inquiry: InquiryCreate) -> InquiryRead:
        """Send an inquiry from the caller's consumer profile to a vendor.

        Raises ``NotFoundError`` if the caller has no couple or individual
        profile or the vendor does not exist, and ``ValidationError`` for
        a blank message.
        """
        consumer = await ProfileService.require_consumer(user_id)
        message = inquiry.message.strip()
        if not message:
            raise ValidationError("Message is required")
        inquiry_id = new_id()
        now = utcnow()
        with transaction() as cursor:
            vendor = cursor.execute(
                "SELECT id, user_id, business_name FROM vendors WHERE id = ?",
                (inquiry.vendor_id,),
            ).fetchone()
            if vendor is None:
                raise NotFoundError("Vendor not found")
            insert_row(
                cursor,
                "inquiries",
                {
                    "id": inquiry_id,
                    consumer.owner_column: consumer.profile_id,
                    "vendor_id": vendor["id"],
                    "message": message,
                    "budget": inquiry.budget,
                    "event_date": inquiry.event_date,
                    "status": InquiryStatus.PENDING,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            NotificationService.notify(
                cursor,
                vendor["user_id"],
                "inquiry",
                "New inquiry",
                message[:200],
                related_id=inquiry_id,
            )
            row = cursor.execute("SELECT * FROM inquiries WHERE id = ?", (inquiry_id,)).fetchone()
        logger.info("Inquiry %s sent to vendor %s", inquiry_id, inquiry.vendor_id)
        return InquiryRead.model_validate(dict(row))

    @classmethod
    async def respond_to_inquiry(
        cls,
        user_id: str,
        inquiry_id: str,
        status: InquiryStatus,
        vendor_response: Optional[str] = None,
    ) -> InquiryRead:
        """Record the vendor's answer to an inquiry.

        ``status`` must be one of ``responded``, ``accepted`` or
        ``declined``.  Only the vendor the inquiry was sent to may
        answer; anyone else gets ``ForbiddenError``.  ``vendor_response``
        is kept unchanged when omitted.
        """
        if status not in RESPONSE_STATUSES:
            raise ValidationError(
                "Status must be one of: " + ", ".join(s.value for s in RESPONSE_STATUSES)
            )
        with transaction() as cursor:
            row = cursor.execute(
                "SELECT i.*, v.user_id AS vendor_user_id, v.business_name"
                " FROM inquiries i JOIN vendors v ON v.id = i.vendor_id WHERE i.id = ?",
                (inquiry_id,),
            ).fetchone()
            if row is None:
                raise NotFoundError("Inquiry not found")
            if row["vendor_user_id"] != user_id:
                raise ForbiddenError("Inquiry was not sent to your vendor profile")
            cursor.execute(
                "UPDATE inquiries SET status = ?, vendor_response = COALESCE(?, vendor_response),"
                " updated_at = ? WHERE id = ?",
                (status.value, vendor_response, utcnow(), inquiry_id),
            )
            consumer_user = cursor.execute(
                CONSUMER_USER_SQL, (row["couple_id"], row["individual_id"])
            ).fetchone()
            NotificationService.notify(
                cursor,
                consumer_user["user_id"],
                "inquiry_response",
                f"{row['business_name']} {status.value} your inquiry",
                vendor_response,
                related_id=inquiry_id,
            )
            updated = cursor.execute("SELECT * FROM inquiries WHERE id = ?", (inquiry_id,)).fetchone()
        logger.info("Inquiry %s marked %s", inquiry_id, status.value)
        return InquiryRead.model_validate(dict(updated))

    @classmethod
    async def list_for_consumer(cls, user_id: str) -> List[InquiryRead]:
        """Inquiries sent by the caller's consumer profile, newest first."""
        consumer = await ProfileService.require_consumer(user_id)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM inquiries WHERE {consumer.owner_column} = ?"
                " ORDER BY created_at DESC",
                (consumer.profile_id,),
            ).fetchall()
        finally:
            conn.close()
        return [InquiryRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def list_for_vendor(cls, user_id: str) -> List[InquiryRead]:
        """Inquiries received by the caller's vendor profile, newest first."""
        vendor = await ProfileService.require_vendor(user_id)
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM inquiries WHERE vendor_id = ? ORDER BY created_at DESC",
                (vendor.id,),
            ).fetchall()
        finally:
            conn.close()
        return [InquiryRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def get_inquiry(cls, user_id: str, inquiry_id: str) -> InquiryRead:
        """Return one inquiry if the caller is its sender or its vendor.

        Other users get ``NotFoundError`` so that ids of foreign
        inquiries are not disclosed.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT i.*, v.user_id AS vendor_user_id FROM inquiries i"
                " JOIN vendors v ON v.id = i.vendor_id WHERE i.id = ?",
                (inquiry_id,),
            ).fetchone()
            consumer_user = None
            if row is not None:
                consumer_user = cursor.execute(
                    CONSUMER_USER_SQL, (row["couple_id"], row["individual_id"])
                ).fetchone()["user_id"]
        finally:
            conn.close()
        if row is None or user_id not in (row["vendor_user_id"], consumer_user):
            raise NotFoundError("Inquiry not found")
        return InquiryRead.model_validate(dict(row))
