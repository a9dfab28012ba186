"""Timeline endpoints for API v1, mounted under ``/timeline`` and ``/timeline-items``."""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.timeline import (
    TimelineItemCreate,
    TimelineItemRead,
    TimelineItemUpdate,
)
from wedsimplify_api.app.services.timeline_service import TimelineService


router = APIRouter()


@router.get("", response_model=List[TimelineItemRead])
async def list_timeline_items(user_id: str = Depends(get_current_user_id)) -> List[TimelineItemRead]:
    return await TimelineService.list_items(user_id)


@router.post("", response_model=TimelineItemRead, status_code=status.HTTP_201_CREATED)
async def create_timeline_item(
    item: TimelineItemCreate,
    user_id: str = Depends(get_current_user_id),
) -> TimelineItemRead:
    return await TimelineService.create_item(user_id, item)


@router.put("/{item_id}", response_model=TimelineItemRead)
async def update_timeline_item(
    updates: TimelineItemUpdate,
    item_id: str = Path(..., description="ID of the timeline item"),
    user_id: str = Depends(get_current_user_id),
) -> TimelineItemRead:
    """Edit a task; send ``{"isCompleted": true}`` to tick it off."""
    return await TimelineService.update_item(user_id, item_id, updates)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timeline_item(
    item_id: str = Path(..., description="ID of the timeline item"),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    await TimelineService.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
