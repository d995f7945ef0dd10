"""
Security helpers for password hashing, bearer tokens and access checks.

Tokens are JSON Web Tokens signed with HMAC‑SHA256 using the
application's ``secret_key``; they embed the customer's email as
``sub`` and an expiration timestamp (``exp``).  Passwords are hashed
with PBKDF2‑HMAC‑SHA256 and stored as ``salthex$hashhex``.

The FastAPI dependencies at the bottom of the module form the access
control gate:

* ``get_current_user`` resolves the bearer token to an active customer.
* ``require_roles`` admits only customers holding one of the roles.
* ``user_can_only_access_their_own_resources`` admits admins, or a
  customer whose id equals the ``customer_id`` path parameter.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Callable, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..models import Customer, CustomerStatus, Role
from .config import Settings
from .errors import ForbiddenError

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], settings: Settings, expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "ana@example.com"}``).
    settings : Settings
        Provides the signing key and the default lifetime.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        ``header.payload.signature``, each part base64url encoded.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, str]]:
    """Verify a JWT and return its claims, or ``None`` when the token is
    malformed, tampered with or expired."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict) or data.get("exp") is None or int(data["exp"]) < int(time.time()):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password with a fresh 16‑byte salt; returns ``salthex$hashhex``."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``salthex$hashhex`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Customer:
    """Dependency that resolves the bearer token to an active customer.

    Raises HTTP 401 when the header is missing, the token is invalid or
    expired, or the customer no longer exists or is inactive.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    payload = decode_access_token(credentials.credentials, request.app.state.settings.secret_key)
    if not payload:
        raise _unauthorized("Invalid or expired token")
    customer = request.app.state.customer_repository.find_by_email(payload.get("sub"))
    if customer is None:
        raise _unauthorized("Customer no longer exists")
    if customer.status == CustomerStatus.INACTIVE:
        raise _unauthorized("Customer account inactive")
    return customer


def require_roles(*roles: Role) -> Callable[..., Customer]:
    """Dependency factory admitting only customers holding one of ``roles``.

    Use as ``Depends(require_roles(Role.ADMIN))``.
    """

    def _role_dependency(current_user: Customer = Depends(get_current_user)) -> Customer:
        if not current_user.roles.intersection(roles):
            raise ForbiddenError()
        return current_user

    return _role_dependency


def check_owner_or_admin(current_user: Customer, customer_id: int) -> None:
    """Raise ``ForbiddenError`` unless the caller is an admin or owns ``customer_id``."""
    if current_user.is_admin:
        return
    if current_user.id != customer_id:
        raise ForbiddenError()


def user_can_only_access_their_own_resources(
    customer_id: int,
    current_user: Customer = Depends(get_current_user),
) -> Customer:
    """Dependency guarding ``/customers/{customer_id}`` style routes."""
    check_owner_or_admin(current_user, customer_id)
    return current_user
