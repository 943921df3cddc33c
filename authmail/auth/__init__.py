"""Authentication core: abstract surface plus a default implementation."""

from .base import AuthCore, AuthRepo
from .exceptions import (
    AuthError,
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .handler import AuthHandler, collect_claims

__all__ = [
    "AuthCore",
    "AuthError",
    "AuthHandler",
    "AuthRepo",
    "InvalidAccessTokenError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "collect_claims",
]
