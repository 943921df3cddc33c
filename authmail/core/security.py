"""Security helpers for password hashing and JWT token generation."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from authmail.core.config import settings


_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password using a secure bcrypt context."""
    return _pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a hashed password."""

    return _pwd_context.verify(plain_password, hashed_password)


def generate_secret() -> str:
    """Return a URL-safe random secret with 256 bits of entropy."""

    return secrets.token_urlsafe(32)


def hash_secret(raw_secret: str) -> str:
    return hashlib.sha256(raw_secret.encode("utf-8")).hexdigest()


def secrets_match(raw_secret: str, secret_hash: str) -> bool:
    """Compare a raw secret against a stored digest in constant time."""

    return hmac.compare_digest(hash_secret(raw_secret), secret_hash)


def create_access_token(
    *,
    subject: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
    secret_key: str | None = None,
    algorithm: str | None = None,
) -> str:
    """Create a signed JWT access token.

    Args:
        subject: Identifier for the token subject.
        expires_delta: Optional custom expiration delta; defaults to configured minutes.
        extra_claims: Optional additional claims to include in the token payload.
        secret_key: Signing key; defaults to the configured JWT secret.
        algorithm: Signing algorithm; defaults to the configured algorithm.
    """

    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expire_delta
    payload: dict[str, Any] = {}
    if extra_claims:
        payload.update(extra_claims)
    payload.update({"sub": str(subject), "exp": expire})
    return jwt.encode(
        payload,
        secret_key or settings.secret_key,
        algorithm=algorithm or settings.jwt_algorithm,
    )


def decode_access_token(
    token: str,
    *,
    secret_key: str | None = None,
    algorithm: str | None = None,
) -> dict[str, Any]:
    """Decode and validate a JWT access token, raising ``JWTError`` when invalid."""

    return jwt.decode(
        token,
        secret_key or settings.secret_key,
        algorithms=[algorithm or settings.jwt_algorithm],
    )


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "generate_secret",
    "get_password_hash",
    "hash_secret",
    "secrets_match",
    "verify_password",
]
