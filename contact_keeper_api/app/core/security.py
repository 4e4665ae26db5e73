"""
Identity primitives and the request authorization guard.

Tokens are compact JWTs (``header.payload.signature``) signed with
HMAC-SHA256 over base64url encoded JSON, using ``settings.secret_key``.
The payload carries the user id as ``sub`` and an ``exp`` timestamp.
Passwords are stored as PBKDF2-HMAC-SHA256 digests with a random salt,
in the form ``salthex$hashhex``.

The guard is split in two: ``authenticate_token`` is a plain function
from a raw token to an ``AuthContext`` (or ``Unauthenticated``), and
``get_current_user`` is the FastAPI dependency each protected route
declares explicitly to run it against the incoming headers.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import Unauthenticated

PBKDF2_ITERATIONS = 100_000

NO_TOKEN_MESSAGE = "no token, authorization denied"
INVALID_TOKEN_MESSAGE = "token is not valid"


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved from a verified token."""

    user_id: int


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed token carrying ``data`` plus an ``exp`` claim.

    Parameters
    ----------
    data : dict
        Claims to embed, e.g. ``{"sub": "42"}``.
    expires_delta : Optional[int]
        Lifetime in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.  Negative values
        produce an already expired token.
    """
    claims = dict(data)
    lifetime = settings.access_token_expire_minutes * 60 if expires_delta is None else expires_delta
    claims["exp"] = int(time.time()) + lifetime
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def create_user_token(user_id: int, expires_delta: Optional[int] = None) -> str:
    return create_access_token({"sub": str(user_id)}, expires_delta=expires_delta)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its payload, or ``None`` when it is
    malformed, tampered with or expired."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and JSONDecodeError are both ValueError subclasses
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        return None
    return data


def authenticate_token(token: Optional[str]) -> AuthContext:
    """Resolve a raw token to the caller's identity.

    Raises ``Unauthenticated`` when the token is missing or fails
    verification.  Touches no storage.
    """
    if not token:
        raise Unauthenticated(NO_TOKEN_MESSAGE)
    payload = decode_access_token(token)
    if payload is None:
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthenticated(INVALID_TOKEN_MESSAGE)
    return AuthContext(user_id=user_id)


bearer = HTTPBearer(auto_error=False)


def get_current_user(
    token: Optional[str] = Header(None, alias=settings.auth_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> AuthContext:
    """Dependency that authenticates the request.

    The token is read from ``settings.auth_header`` (``x-auth-token``);
    an ``Authorization: Bearer`` header is used when that is absent.
    """
    if not token and credentials is not None:
        token = credentials.credentials
    return authenticate_token(token)


def hash_password(password: str) -> str:
    """Hash a password with PBKDF2-HMAC-SHA256 and a fresh 16 byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a ``salthex$hashhex`` string in constant time."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
