"""Configuration objects for the email verification plugin."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, Union

from authmail.core.config import Settings
from authmail.exceptions import MissingConfigurationError
from authmail.schemas.email import RenderedTemplate, TemplateArgs, TokenPurpose

if TYPE_CHECKING:
    from authmail.services.email import EmailClient


TemplateFunction = Callable[[TemplateArgs], Union[RenderedTemplate, Mapping[str, str], None]]
LinkFactory = Callable[[str, str], Awaitable[str]]


@dataclass(frozen=True)
class EmailOverrides:
    """Per-purpose replacements for plugin-level message fields."""

    subject: Optional[str] = None
    from_address: Optional[str] = None
    sender_name: Optional[str] = None


@dataclass(frozen=True)
class PurposeConfig:
    """Overrides and link lifetime for one token purpose."""

    email: Optional[EmailOverrides] = None
    link_expiration: Optional[timedelta] = None


@dataclass(frozen=True)
class LinkServices:
    """Caller-owned builders turning ``(email, token)`` into a URL."""

    create_confirm_email_link: LinkFactory
    create_reset_password_link: LinkFactory

    def for_purpose(self, purpose: TokenPurpose) -> LinkFactory:
        if purpose is TokenPurpose.RESET_PASSWORD:
            return self.create_reset_password_link
        return self.create_confirm_email_link


@dataclass(frozen=True)
class RepoHooks:
    """Caller-owned persistence callbacks run after a token is consumed."""

    confirm_email: Callable[[str], Awaitable[bool]]
    reset_password: Callable[[str, str], Awaitable[bool]]


@dataclass(frozen=True)
class EmailPluginOptions:
    """Immutable plugin configuration.

    Required fields default to ``None`` so that :meth:`validate` can report
    exactly which one is missing.
    """

    sender_name: Optional[str] = None
    sender_email: Optional[str] = None
    client: Optional["EmailClient"] = None
    services: Optional[LinkServices] = None
    repo: Optional[RepoHooks] = None
    email_config: Mapping[TokenPurpose, PurposeConfig] = field(default_factory=dict)
    templates: Mapping[TokenPurpose, TemplateFunction] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only copies of the mappings the caller passed.
        object.__setattr__(self, "email_config", MappingProxyType(dict(self.email_config or {})))
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates or {})))

    def validate(self) -> "EmailPluginOptions":
        """Raise ``MissingConfigurationError`` for the first absent required option."""

        required: tuple[tuple[str, Any], ...] = (
            ("senderName", self.sender_name),
            ("senderEmail", self.sender_email),
            ("client", self.client),
            ("services", self.services),
            ("repo", self.repo),
        )
        for key, value in required:
            if not value:
                raise MissingConfigurationError(key)
        return self

    def purpose_config(self, purpose: TokenPurpose) -> PurposeConfig:
        return self.email_config.get(purpose) or PurposeConfig()

    def overrides(self, purpose: TokenPurpose) -> EmailOverrides:
        return self.purpose_config(purpose).email or EmailOverrides()

    def template(self, purpose: TokenPurpose) -> Optional[TemplateFunction]:
        return self.templates.get(purpose)

    def token_ttls(self) -> dict[TokenPurpose, timedelta]:
        """Link lifetimes configured per purpose, omitting unset ones."""

        ttls: dict[TokenPurpose, timedelta] = {}
        for purpose in TokenPurpose:
            expiration = self.purpose_config(purpose).link_expiration
            if expiration:
                ttls[purpose] = expiration
        return ttls

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        *,
        client: "EmailClient",
        services: LinkServices,
        repo: RepoHooks,
        email_overrides: Mapping[TokenPurpose, EmailOverrides] | None = None,
        templates: Mapping[TokenPurpose, TemplateFunction] | None = None,
    ) -> "EmailPluginOptions":
        """Build options from environment settings plus caller-owned collaborators."""

        overrides = email_overrides or {}
        expirations = {
            TokenPurpose.CONFIRM_EMAIL: config.email_confirmation_token_expiry_minutes,
            TokenPurpose.RESET_PASSWORD: config.password_reset_token_expiry_minutes,
        }
        email_config = {
            purpose: PurposeConfig(
                email=overrides.get(purpose),
                link_expiration=timedelta(minutes=minutes),
            )
            for purpose, minutes in expirations.items()
        }
        return cls(
            sender_name=config.email_sender_name,
            sender_email=config.email_sender,
            client=client,
            services=services,
            repo=repo,
            email_config=email_config,
            templates=templates or {},
        )


__all__ = [
    "EmailOverrides",
    "EmailPluginOptions",
    "LinkFactory",
    "LinkServices",
    "PurposeConfig",
    "RepoHooks",
    "TemplateFunction",
]
