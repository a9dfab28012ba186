"""
User settings endpoints for API v1.

These routes let a signed-in user read and change their own
notification preferences and time zone.  Users who never saved
settings see the defaults.
"""

from fastapi import APIRouter, Depends

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.settings import UserSettingsRead, UserSettingsUpdate
from wedsimplify_api.app.services.user_settings_service import UserSettingsService


router = APIRouter()


@router.get("", response_model=UserSettingsRead)
async def get_settings(user_id: str = Depends(get_current_user_id)) -> UserSettingsRead:
    return await UserSettingsService.get_settings(user_id)


@router.put("", response_model=UserSettingsRead)
async def update_settings(
    updates: UserSettingsUpdate,
    user_id: str = Depends(get_current_user_id),
) -> UserSettingsRead:
    """Change only the supplied flags; the rest keep their values."""
    return await UserSettingsService.update_settings(user_id, updates)
