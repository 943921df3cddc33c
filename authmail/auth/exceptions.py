"""Authentication core exceptions."""

from __future__ import annotations


class AuthError(Exception):
    """Base authentication error."""

    pass


class UserNotFoundError(AuthError):
    """Raised when no user exists for the given email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"User not found: {email}")
        self.email = email


class UserAlreadyExistsError(AuthError):
    """Raised when attempting to register an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"A user with email '{email}' already exists")
        self.email = email


class InvalidCredentialsError(AuthError):
    """Raised when the supplied password does not match the stored hash."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class InvalidAccessTokenError(AuthError):
    """Raised when an access token is malformed, tampered with or expired."""

    pass


class InvalidRefreshTokenError(AuthError):
    """Raised when a refresh token is unknown, revoked or expired."""

    pass


__all__ = [
    "AuthError",
    "InvalidAccessTokenError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
