"""Service layer for verification tokens, emails and the auth gateway."""

from .email import (
    DEFAULT_SUBJECTS,
    EmailClient,
    EmailDeliveryError,
    EmailDispatcher,
    HttpEmailClient,
    SmtpEmailClient,
    build_mime_message,
)
from .gateway import EmailAuthGateway, create_email_gateway
from .options import (
    EmailOverrides,
    EmailPluginOptions,
    LinkServices,
    PurposeConfig,
    RepoHooks,
)
from .templates import EmailTemplateRenderer
from .tokens import TokenRegistry, VerificationToken, VerificationTokenService

__all__ = [
    "DEFAULT_SUBJECTS",
    "EmailAuthGateway",
    "EmailClient",
    "EmailDeliveryError",
    "EmailDispatcher",
    "EmailOverrides",
    "EmailPluginOptions",
    "EmailTemplateRenderer",
    "HttpEmailClient",
    "LinkServices",
    "PurposeConfig",
    "RepoHooks",
    "SmtpEmailClient",
    "TokenRegistry",
    "VerificationToken",
    "VerificationTokenService",
    "build_mime_message",
    "create_email_gateway",
]
