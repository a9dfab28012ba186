"""
Object storage adapter for portfolio images.

The bucket itself is external; this service only mints presigned URLs
for it and keeps the access policy of each stored object.  A presigned
URL carries its method, expiry and an HMAC‑SHA256 signature over
``METHOD\\npath\\nexpiry`` computed with the application secret, so
the storage gateway can verify it without calling back into the API.

Inside the API objects are addressed by entity paths of the form
``/objects/uploads/<id>``; ``normalize_object_path`` converts the raw
bucket URL a browser uploaded to into such a path.
"""

import logging
import time
from typing import Optional
from urllib.parse import urlencode, urlsplit

from wedsimplify_api.app.core.config import settings
from wedsimplify_api.app.core.db import get_connection, new_id, transaction, utcnow
from wedsimplify_api.app.core.exceptions import ForbiddenError, NotFoundError
from wedsimplify_api.app.core.security import sign_text
from wedsimplify_api.app.schemas.objects import UploadUrlRead

logger = logging.getLogger(__name__)

OBJECT_PREFIX = "/objects"
VISIBILITIES = ("public", "private")


class ObjectStorageService:
    """Presigned URLs and ACLs for objects in the portfolio bucket."""

    @staticmethod
    def _presign(method: str, bucket_path: str, ttl: Optional[int] = None) -> tuple:
        expires_at = int(time.time()) + (ttl or settings.upload_url_ttl_seconds)
        signature = sign_text(f"{method}\n{bucket_path}\n{expires_at}")
        query = urlencode({"X-Method": method, "X-Expires": expires_at, "X-Signature": signature})
        return f"{settings.object_storage_url.rstrip('/')}{bucket_path}?{query}", expires_at

    @classmethod
    def get_upload_url(cls) -> UploadUrlRead:
        """Presign a PUT for a fresh object under ``/uploads``."""
        bucket_path = f"/uploads/{new_id()}"
        url, expires_at = cls._presign("PUT", bucket_path)
        return UploadUrlRead(
            upload_url=url,
            object_path=f"{OBJECT_PREFIX}{bucket_path}",
            expires_at=expires_at,
        )

    @staticmethod
    def normalize_object_path(raw_url: str) -> str:
        """Map a bucket URL (with or without query) to its entity path.

        URLs outside the bucket are returned unchanged, so that images
        hosted elsewhere can still be registered as portfolio items.
        """
        if raw_url.startswith(f"{OBJECT_PREFIX}/"):
            return raw_url.split("?", 1)[0]
        base = urlsplit(settings.object_storage_url)
        parts = urlsplit(raw_url)
        base_path = base.path.rstrip("/")
        if parts.netloc != base.netloc or not parts.path.startswith(f"{base_path}/"):
            return raw_url
        return f"{OBJECT_PREFIX}{parts.path[len(base_path):]}"

    @staticmethod
    def apply_acl(cursor, raw_url: str, owner_id: str, visibility: str = "private") -> str:
        """Record the owner and visibility of an object on the caller's cursor.

        Returns the normalised path.  Only entity paths get an ACL;
        foreign URLs are passed through untouched.  Re-registering an
        object updates its visibility, but an object owned by someone
        else raises ``ForbiddenError``.
        """
        if visibility not in VISIBILITIES:
            raise ValueError(f"Unknown visibility {visibility!r}")
        object_path = ObjectStorageService.normalize_object_path(raw_url)
        if not object_path.startswith(f"{OBJECT_PREFIX}/"):
            return object_path
        row = cursor.execute(
            "SELECT owner_id FROM object_acls WHERE object_path = ?", (object_path,)
        ).fetchone()
        if row is not None and row["owner_id"] != owner_id:
            raise ForbiddenError("Object belongs to another user")
        cursor.execute(
            "INSERT INTO object_acls (object_path, owner_id, visibility, created_at)"
            " VALUES (?, ?, ?, ?)"
            " ON CONFLICT(object_path) DO UPDATE SET visibility = excluded.visibility",
            (object_path, owner_id, visibility, utcnow()),
        )
        logger.info("ACL for %s set to %s (owner %s)", object_path, visibility, owner_id)
        return object_path

    @classmethod
    async def set_acl_policy(cls, raw_url: str, owner_id: str, visibility: str = "private") -> str:
        """Standalone form of ``apply_acl`` running in its own transaction."""
        with transaction() as cursor:
            return cls.apply_acl(cursor, raw_url, owner_id, visibility)

    @classmethod
    async def can_access(cls, object_path: str, user_id: Optional[str]) -> bool:
        """Whether ``user_id`` may read the object; public objects are readable by anyone."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT owner_id, visibility FROM object_acls WHERE object_path = ?",
                (object_path,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Object not found")
        return row["visibility"] == "public" or row["owner_id"] == user_id

    @classmethod
    def get_download_url(cls, object_path: str) -> str:
        if not object_path.startswith(f"{OBJECT_PREFIX}/"):
            raise NotFoundError("Object not found")
        url, _ = cls._presign("GET", object_path[len(OBJECT_PREFIX):])
        return url
