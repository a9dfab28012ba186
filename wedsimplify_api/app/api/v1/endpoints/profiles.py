"""
Profile setup and editing endpoints for API v1.

``POST /setup-profile`` takes a flat body: the ``role`` plus the
fields of the matching profile, e.g.
``{"role": "couple", "coupleName": "Alex & Sam", "email": "a@x.com"}``.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.user import Profile, ProfileSetupResult
from wedsimplify_api.app.services.profile_service import ProfileService


router = APIRouter()


@router.post("/setup-profile", response_model=ProfileSetupResult, status_code=status.HTTP_201_CREATED)
async def setup_profile(
    body: Dict[str, Any] = Body(..., examples=[{"role": "couple", "coupleName": "Alex & Sam"}]),
    user_id: str = Depends(get_current_user_id),
) -> ProfileSetupResult:
    """Create the caller's one and only role profile.

    Returns 400 for an unknown role, 422 when required fields are
    missing and 409 when the user already has a profile.
    """
    fields = dict(body)
    role = fields.pop("role", None)
    profile = await ProfileService.complete_profile_setup(user_id, role, fields)
    return ProfileSetupResult(profile=profile)


@router.put("/profile", response_model=Profile)
async def update_profile(
    body: Dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
) -> Profile:
    """Partially update the caller's profile, whichever role it has."""
    return await ProfileService.update_profile(user_id, body)
