"""Email message and template schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TokenPurpose(str, Enum):
    """Workflow a verification token (and its email) belongs to."""

    CONFIRM_EMAIL = "confirm-email"
    RESET_PASSWORD = "reset-password"


class TemplateArgs(BaseModel):
    """Values made available to email templates."""

    email: str
    link: str

    model_config = ConfigDict(frozen=True)


class RenderedTemplate(BaseModel):
    """Plain-text and HTML bodies produced by a template."""

    text: str = ""
    html: str = ""

    model_config = ConfigDict(frozen=True)


class OutgoingEmail(BaseModel):
    """Fully resolved message handed to an email client."""

    sender_name: str
    from_address: str
    to: tuple[str, ...] = Field(min_length=1)
    subject: str
    text: str
    html: str

    model_config = ConfigDict(frozen=True)


__all__ = ["OutgoingEmail", "RenderedTemplate", "TemplateArgs", "TokenPurpose"]
