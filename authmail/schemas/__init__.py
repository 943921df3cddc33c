"""Pydantic schemas shared across the package."""

from .auth import (
    ConfirmEmailRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    RefreshTokenRequest,
    RegistrationResponse,
    RegistrationResult,
    ResendConfirmationRequest,
    TokenPair,
    User,
    UserCreate,
    UserId,
    UserLogin,
)
from .email import OutgoingEmail, RenderedTemplate, TemplateArgs, TokenPurpose

__all__ = [
    "ConfirmEmailRequest",
    "OutgoingEmail",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "RefreshTokenRequest",
    "RegistrationResponse",
    "RegistrationResult",
    "RenderedTemplate",
    "ResendConfirmationRequest",
    "TemplateArgs",
    "TokenPair",
    "TokenPurpose",
    "User",
    "UserCreate",
    "UserId",
    "UserLogin",
]
