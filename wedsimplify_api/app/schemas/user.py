"""
Pydantic models for users and the unified "auth user" view.

``AuthUserRead`` is what ``GET /api/auth/user`` returns: the user row
plus ``roleData``, the profile matching ``role``.  ``roleData`` is
``null`` until profile setup has run, which tells the client to show
the setup form.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .base import CamelModel
from .profile import CoupleRead, IndividualRead, VendorRead


class Role(str, Enum):
    COUPLE = "couple"
    INDIVIDUAL = "individual"
    VENDOR = "vendor"


CONSUMER_ROLES = (Role.COUPLE, Role.INDIVIDUAL)

Profile = Union[CoupleRead, IndividualRead, VendorRead]


class UserRead(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Role
    auth_provider: Optional[str] = None
    provider_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthUserRead(UserRead):
    role_data: Optional[Profile] = None


class ProfileSetupResult(CamelModel):
    success: bool = True
    profile: Profile
