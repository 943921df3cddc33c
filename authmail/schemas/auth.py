"""Authentication-related Pydantic schemas."""

from __future__ import annotations

import uuid
from typing import Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field


UserId = Union[int, str, uuid.UUID]


class UserCreate(BaseModel):
    """Schema for creating a user via email/password registration.

    Additional fields are preserved so repositories can persist profile data
    supplied at sign-up.
    """

    email: EmailStr
    password: str = Field(min_length=8)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="allow")


class UserLogin(BaseModel):
    """Schema for logging in with email and password."""

    email: EmailStr
    password: str

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class User(BaseModel):
    """User record as returned by an auth repository."""

    id: UserId
    email: str
    password: str
    email_verified: bool = False

    model_config = ConfigDict(from_attributes=True, extra="allow")


class TokenPair(BaseModel):
    """Access and refresh tokens issued after a successful login."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"

    model_config = ConfigDict(frozen=True)


class RegistrationResult(BaseModel):
    """Outcome of a registration: the created user and whether the email went out."""

    user: User
    email_sent: bool

    model_config = ConfigDict(frozen=True)


class RegistrationResponse(BaseModel):
    """Public view of a registration result."""

    id: UserId
    email: str
    email_verified: bool
    email_sent: bool

    model_config = ConfigDict(frozen=True)


class ResendConfirmationRequest(BaseModel):
    """Payload for requesting a new confirmation email."""

    email: EmailStr

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class ConfirmEmailRequest(BaseModel):
    """Payload for confirming an email address with a token."""

    email: EmailStr
    token: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class PasswordResetRequest(BaseModel):
    """Payload for requesting a password reset email."""

    email: EmailStr

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class PasswordResetConfirm(BaseModel):
    """Payload for setting a new password with a reset token."""

    email: EmailStr
    token: str = Field(min_length=1)
    password: str = Field(min_length=8)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class RefreshTokenRequest(BaseModel):
    """Payload for rotating a refresh token."""

    refresh_token: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


__all__ = [
    "ConfirmEmailRequest",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "RefreshTokenRequest",
    "RegistrationResponse",
    "RegistrationResult",
    "ResendConfirmationRequest",
    "TokenPair",
    "User",
    "UserCreate",
    "UserId",
    "UserLogin",
]
