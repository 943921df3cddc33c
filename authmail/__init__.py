"""Email confirmation and password reset flows on top of an auth core."""

from authmail.auth import (
    AuthCore,
    AuthError,
    AuthHandler,
    AuthRepo,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from authmail.exceptions import (
    EmailDispatchError,
    EmailNotVerifiedError,
    EmailPluginError,
    InvalidOrExpiredTokenError,
    MissingConfigurationError,
)
from authmail.schemas import (
    OutgoingEmail,
    RegistrationResult,
    RenderedTemplate,
    TemplateArgs,
    TokenPair,
    TokenPurpose,
    User,
    UserCreate,
    UserLogin,
)
from authmail.services import (
    EmailAuthGateway,
    EmailClient,
    EmailOverrides,
    EmailPluginOptions,
    HttpEmailClient,
    LinkServices,
    PurposeConfig,
    RepoHooks,
    SmtpEmailClient,
    VerificationTokenService,
    create_email_gateway,
)

__all__ = [
    "AuthCore",
    "AuthError",
    "AuthHandler",
    "AuthRepo",
    "EmailAuthGateway",
    "EmailClient",
    "EmailDispatchError",
    "EmailNotVerifiedError",
    "EmailOverrides",
    "EmailPluginError",
    "EmailPluginOptions",
    "HttpEmailClient",
    "InvalidCredentialsError",
    "InvalidOrExpiredTokenError",
    "LinkServices",
    "MissingConfigurationError",
    "OutgoingEmail",
    "PurposeConfig",
    "RegistrationResult",
    "RenderedTemplate",
    "RepoHooks",
    "SmtpEmailClient",
    "TemplateArgs",
    "TokenPair",
    "TokenPurpose",
    "User",
    "UserAlreadyExistsError",
    "UserCreate",
    "UserLogin",
    "UserNotFoundError",
    "VerificationTokenService",
    "create_email_gateway",
]
