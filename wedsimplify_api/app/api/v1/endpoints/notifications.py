"""Notification feed endpoints for API v1."""

from typing import Dict, List

from fastapi import APIRouter, Depends, Path, Query

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.notification import NotificationRead
from wedsimplify_api.app.services.notification_service import NotificationService


router = APIRouter()


@router.get("", response_model=List[NotificationRead])
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    user_id: str = Depends(get_current_user_id),
) -> List[NotificationRead]:
    """Notifications of the caller, newest first."""
    return await NotificationService.list_notifications(user_id, unread_only)


@router.put("/read-all", response_model=Dict[str, int])
async def mark_all_read(user_id: str = Depends(get_current_user_id)) -> Dict[str, int]:
    updated = await NotificationService.mark_all_read(user_id)
    return {"updated": updated}


@router.put("/{notification_id}/read", response_model=NotificationRead)
async def mark_read(
    notification_id: str = Path(..., description="ID of the notification"),
    user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    return await NotificationService.mark_read(user_id, notification_id)
