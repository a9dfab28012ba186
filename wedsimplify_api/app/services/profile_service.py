"""
Profile resolution and one-time profile setup.

Every user shares the ``users`` table but carries a different profile
depending on ``users.role``.  The three shapes form a closed set:

* ``couple``     -> ``couples`` row, ``CoupleRead``
* ``individual`` -> ``individuals`` row, ``IndividualRead``
* ``vendor``     -> ``vendors`` row, ``VendorRead``

``PROFILE_KINDS`` maps each role to its table and schemas and
``fetch_profile`` is the single lookup used for every variant.  Other
services call ``require_vendor`` / ``require_consumer`` to scope their
queries to the caller's own profile.

Profile setup writes two rows (the role on ``users`` and the new
profile) inside one ``BEGIN IMMEDIATE`` transaction.  The unique
``user_id`` column of each profile table is the final guard against a
duplicate submission racing past the existence check.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from wedsimplify_api.app.core.db import (
    assignments,
    get_connection,
    insert_row,
    new_id,
    transaction,
    utcnow,
)
from wedsimplify_api.app.core.exceptions import (
    ConflictError,
    InvalidRoleError,
    NotFoundError,
    ValidationError,
)
from wedsimplify_api.app.schemas.profile import (
    CoupleCreate,
    CoupleRead,
    CoupleUpdate,
    IndividualCreate,
    IndividualRead,
    IndividualUpdate,
    VendorCreate,
    VendorRead,
    VendorUpdate,
)
from wedsimplify_api.app.schemas.user import AuthUserRead, CONSUMER_ROLES, Profile, Role
from wedsimplify_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileKind:
    table: str
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    read_schema: Type[BaseModel]


PROFILE_KINDS: Dict[Role, ProfileKind] = {
    Role.COUPLE: ProfileKind("couples", CoupleCreate, CoupleUpdate, CoupleRead),
    Role.INDIVIDUAL: ProfileKind("individuals", IndividualCreate, IndividualUpdate, IndividualRead),
    Role.VENDOR: ProfileKind("vendors", VendorCreate, VendorUpdate, VendorRead),
}


@dataclass(frozen=True)
class ConsumerRef:
    """The caller's consumer profile, used to scope planning data and inquiries."""

    role: Role
    profile_id: str
    budget: Optional[float] = None

    @property
    def owner_column(self) -> str:
        return "couple_id" if self.role is Role.COUPLE else "individual_id"


def parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise InvalidRoleError(f"Invalid role: {value!r}") from None


def fetch_profile(cursor: sqlite3.Cursor, role: Role, user_id: str) -> Optional[Profile]:
    """Load the profile of ``user_id`` from the table of ``role``."""
    kind = PROFILE_KINDS[role]
    row = cursor.execute(
        f"SELECT * FROM {kind.table} WHERE user_id = ?", (user_id,)
    ).fetchone()
    return kind.read_schema.model_validate(dict(row)) if row else None


def _first_filled(fields: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = fields.get(key)
        if value not in (None, ""):
            return value
    return None


def _with_defaults(role: Role, fields: Dict[str, Any], user_row: sqlite3.Row) -> Dict[str, Any]:
    """Fill in the display name of consumer profiles from the user's claims."""
    payload = dict(fields)
    display_name = " ".join(
        part for part in (user_row["first_name"], user_row["last_name"]) if part
    )
    if role is Role.COUPLE and _first_filled(payload, "coupleName", "couple_name") is None:
        payload["couple_name"] = display_name
    if role is Role.INDIVIDUAL and _first_filled(payload, "fullName", "full_name") is None:
        payload["full_name"] = display_name
    return payload


class ProfileService:
    """Resolve the unified auth-user view and manage role profiles."""

    @classmethod
    async def resolve_auth_user(cls, user_id: str) -> AuthUserRead:
        """Return the user plus ``roleData``.

        ``roleData`` is ``None`` until profile setup has completed, which
        the client treats as "needs setup".  Raises ``NotFoundError`` if
        the user row does not exist.
        """
        user = await UserService.require_user(user_id)
        conn = get_connection()
        try:
            role_data = fetch_profile(conn.cursor(), user.role, user_id)
        finally:
            conn.close()
        return AuthUserRead(**user.model_dump(), role_data=role_data)

    @classmethod
    async def complete_profile_setup(cls, user_id: str, role: Any, fields: Dict[str, Any]) -> Profile:
        """Attach the first and only profile to a user.

        Parameters
        ----------
        user_id : str
            Authenticated user id.
        role : Any
            ``"couple"``, ``"individual"`` or ``"vendor"``; anything else
            raises ``InvalidRoleError``.
        fields : dict
            Profile attributes, camelCase or snake_case.  Vendors need
            business name, category, description, country, state and
            city; consumers need a display name, which defaults to the
            user's first and last name.

        Raises ``ValidationError`` for missing fields, ``NotFoundError``
        for an unknown user and ``ConflictError`` if any profile already
        exists for the user.
        """
        role = parse_role(role)
        kind = PROFILE_KINDS[role]
        now = utcnow()
        try:
            with transaction() as cursor:
                user_row = cursor.execute(
                    "SELECT first_name, last_name FROM users WHERE id = ?", (user_id,)
                ).fetchone()
                if user_row is None:
                    raise NotFoundError("User not found")
                for other in PROFILE_KINDS.values():
                    existing = cursor.execute(
                        f"SELECT 1 FROM {other.table} WHERE user_id = ?", (user_id,)
                    ).fetchone()
                    if existing:
                        raise ConflictError("Profile already set up")

                try:
                    data = kind.create_schema.model_validate(_with_defaults(role, fields, user_row))
                except PydanticValidationError as exc:
                    raise ValidationError.from_pydantic(exc) from None

                values = data.model_dump()
                if role is Role.VENDOR and not values.get("location"):
                    values["location"] = ", ".join(
                        values[part] for part in ("city", "state", "country")
                    )
                profile_id = new_id()
                cursor.execute(
                    "UPDATE users SET role = ?, updated_at = ? WHERE id = ?",
                    (role.value, now, user_id),
                )
                insert_row(
                    cursor,
                    kind.table,
                    {"id": profile_id, "user_id": user_id, **values, "created_at": now, "updated_at": now},
                )
                profile = fetch_profile(cursor, role, user_id)
        except sqlite3.IntegrityError as exc:
            logger.warning("Duplicate profile setup for user %s: %s", user_id, exc)
            raise ConflictError("Profile already set up") from exc
        logger.info("Completed %s profile setup for user %s", role.value, user_id)
        return profile

    @classmethod
    async def update_profile(cls, user_id: str, fields: Dict[str, Any]) -> Profile:
        """Apply a partial update to the caller's profile, whatever its role."""
        user = await UserService.require_user(user_id)
        kind = PROFILE_KINDS[user.role]
        try:
            updates = kind.update_schema.model_validate(fields).model_dump(exclude_unset=True)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from None
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if updates:
                clause, params = assignments({**updates, "updated_at": utcnow()})
                cursor.execute(
                    f"UPDATE {kind.table} SET {clause} WHERE user_id = ?",
                    (*params, user_id),
                )
                conn.commit()
            profile = fetch_profile(cursor, user.role, user_id)
        finally:
            conn.close()
        if profile is None:
            raise NotFoundError("Profile not found")
        logger.info("Updated %s profile of user %s", user.role.value, user_id)
        return profile

    @classmethod
    async def require_vendor(cls, user_id: str) -> VendorRead:
        """Return the caller's vendor profile or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            vendor = fetch_profile(conn.cursor(), Role.VENDOR, user_id)
        finally:
            conn.close()
        if vendor is None:
            raise NotFoundError("Vendor profile not found")
        return vendor

    @classmethod
    async def require_consumer(cls, user_id: str) -> ConsumerRef:
        """Return a reference to the caller's couple or individual profile."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            for role in CONSUMER_ROLES:
                profile = fetch_profile(cursor, role, user_id)
                if profile is not None:
                    return ConsumerRef(role=role, profile_id=profile.id, budget=profile.budget)
        finally:
            conn.close()
        raise NotFoundError("Consumer profile not found")
