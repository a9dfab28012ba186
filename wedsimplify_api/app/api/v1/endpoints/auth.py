"""
Authentication endpoints for API v1.

Login itself happens at the identity provider.  The client then posts
the provider's token to ``/auth/login``, which creates or refreshes the
local user row from the token claims.  ``/auth/user`` returns the
unified view the client uses to decide between dashboard and setup.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from wedsimplify_api.app.core.security import get_current_user_id, get_identity
from wedsimplify_api.app.schemas.user import AuthUserRead
from wedsimplify_api.app.services.profile_service import ProfileService
from wedsimplify_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/login", response_model=AuthUserRead)
async def login(identity: Dict[str, Any] = Depends(get_identity)) -> AuthUserRead:
    """Upsert the user described by the bearer token and return it.

    Logging in again refreshes email, names and avatar but never
    changes the role chosen during profile setup.
    """
    user = await UserService.upsert_user(identity)
    return await ProfileService.resolve_auth_user(user.id)


@router.get("/user", response_model=AuthUserRead)
async def get_auth_user(user_id: str = Depends(get_current_user_id)) -> AuthUserRead:
    """Return the current user with ``roleData`` (``null`` before setup)."""
    return await ProfileService.resolve_auth_user(user_id)


@router.delete("/user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(user_id: str = Depends(get_current_user_id)) -> Response:
    """Delete the account together with its profile and all owned records."""
    await UserService.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
