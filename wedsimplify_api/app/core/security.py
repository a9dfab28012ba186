"""
Identity provider adapter.

Authentication itself is delegated to an external identity provider.
The provider hands the browser a bearer token in JWT form
(``header.payload.signature``, HMAC‑SHA256, base64url encoded) signed
with the secret shared with this API.  This module verifies such
tokens and exposes the subject id and basic claims to the endpoints:

* ``sub`` – the stable user id, used as ``users.id``;
* ``email``, ``first_name``, ``last_name`` – profile claims;
* ``provider`` – name of the upstream login provider.

``create_access_token`` is the signing half of the same scheme.  It
is used by tests and by ``create_token.py`` to mint development
tokens; in production the identity provider issues them.

The same HMAC primitive signs presigned object storage URLs.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .db import get_connection

logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def sign(message: bytes, secret: Optional[str] = None) -> bytes:
    """Compute the HMAC‑SHA256 signature of ``message``."""
    key = (secret or settings.secret_key).encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).digest()


def sign_text(message: str) -> str:
    """Signature of a text message as a base64url string."""
    return _b64_url_encode(sign(message.encode("utf-8")))


def verify_text(message: str, signature: str) -> bool:
    return hmac.compare_digest(sign_text(message), signature)


def create_access_token(claims: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed identity token carrying ``claims``.

    Parameters
    ----------
    claims : dict
        Claims to embed, at least ``sub`` (the user id).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(claims)
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signature_b64 = _b64_url_encode(sign(f"{header_b64}.{payload_b64}".encode("utf-8")))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims, or ``None`` if it is invalid.

    A token is rejected when it is malformed, its signature does not
    match, it has no ``sub`` claim, or its ``exp`` lies in the past.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    try:
        actual_sig = _b64_url_decode(signature_b64)
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    expected_sig = sign(f"{header_b64}.{payload_b64}".encode("utf-8"))
    if not hmac.compare_digest(expected_sig, actual_sig):
        return None
    if not isinstance(payload, dict) or not payload.get("sub"):
        return None
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return payload


security = HTTPBearer(auto_error=False)


def get_identity(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency returning the verified claims of the caller.

    Raises HTTP 401 when the ``Authorization`` header is missing or the
    token does not verify; the client reacts by redirecting to login.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = decode_access_token(credentials.credentials)
    if claims is None:
        logger.info("Rejected invalid or expired identity token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def get_current_user_id(identity: Dict[str, Any] = Depends(get_identity)) -> str:
    """Dependency returning the authenticated user id (the ``sub`` claim).

    The user row is created by ``/auth/login``.  A verified token whose
    subject has no row (never logged in, or the account was deleted)
    is rejected with 401 so the client goes back through login.
    """
    user_id = str(identity["sub"])
    conn = get_connection()
    try:
        user_row = conn.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
    finally:
        conn.close()
    if not user_row:
        logger.info("Rejected token for unknown user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Optional[str]:
    """Like ``get_current_user_id`` but returns ``None`` for anonymous callers."""
    if credentials is None:
        return None
    claims = decode_access_token(credentials.credentials)
    return str(claims["sub"]) if claims else None
