"""Exceptions raised by the email verification plugin."""

from __future__ import annotations

from authmail.schemas.email import TokenPurpose


class EmailPluginError(Exception):
    """Base email plugin error.

    Attributes:
        context: Flow the error originates from (``config``, ``login`` or a token purpose).
        code: Machine-readable error name.
        message: Human-readable description without the plugin prefix.
    """

    origin = "authmail-email-plugin"

    def __init__(self, context: str, code: str, message: str) -> None:
        super().__init__(f"Email plugin exception: {message}")
        self.context = context
        self.code = code
        self.message = message


class MissingConfigurationError(EmailPluginError):
    """Raised at construction time when a required option is absent."""

    def __init__(self, key: str) -> None:
        super().__init__("config", "MissingConfiguration", f"{key} option is required")
        self.key = key


class EmailNotVerifiedError(EmailPluginError):
    """Raised when logging in with an account whose email is not confirmed."""

    def __init__(self, email: str) -> None:
        super().__init__("login", "EmailNotVerified", f"Email not verified: {email}")
        self.email = email


class InvalidOrExpiredTokenError(EmailPluginError):
    """Raised when a verification token is unknown, wrong, used or expired."""

    def __init__(self, purpose: TokenPurpose, email: str) -> None:
        super().__init__(
            purpose.value,
            "InvalidOrExpiredToken",
            f"Invalid or expired {purpose.value} token for {email}",
        )
        self.purpose = purpose
        self.email = email


class EmailDispatchError(EmailPluginError):
    """Raised when a verification email could not be handed to the transport."""

    def __init__(self, purpose: TokenPurpose, email: str) -> None:
        super().__init__(
            purpose.value,
            "EmailDispatchFailure",
            f"Failed to send {purpose.value} email to {email}",
        )
        self.purpose = purpose
        self.email = email


__all__ = [
    "EmailDispatchError",
    "EmailNotVerifiedError",
    "EmailPluginError",
    "InvalidOrExpiredTokenError",
    "MissingConfigurationError",
]
