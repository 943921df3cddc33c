"""Authentication gateway adding email confirmation and password reset flows."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from authmail.auth.base import AuthCore, AuthRepo
from authmail.auth.exceptions import InvalidCredentialsError, UserNotFoundError
from authmail.auth.handler import collect_claims
from authmail.exceptions import (
    EmailDispatchError,
    EmailNotVerifiedError,
    InvalidOrExpiredTokenError,
)
from authmail.schemas.auth import RegistrationResult, TokenPair, User, UserCreate, UserId, UserLogin
from authmail.schemas.email import TemplateArgs, TokenPurpose
from authmail.services.email import EmailDispatcher
from authmail.services.options import EmailPluginOptions
from authmail.services.templates import EmailTemplateRenderer
from authmail.services.tokens import VerificationTokenService

logger = logging.getLogger(__name__)


class EmailAuthGateway(AuthCore):
    """Wraps an auth core so that accounts must confirm their email before login.

    The wrapped core keeps ownership of hashing, persistence and session
    tokens; the gateway adds verification tokens and the emails carrying them.
    Operations it does not change are forwarded unchanged.
    """

    def __init__(
        self,
        auth_core: AuthCore,
        options: EmailPluginOptions,
        *,
        clock: Callable[[], datetime] | None = None,
        token_service: VerificationTokenService | None = None,
    ) -> None:
        self._options = options.validate()
        self._auth = auth_core
        self._tokens = token_service or VerificationTokenService(options.token_ttls(), clock=clock)
        self._renderer = EmailTemplateRenderer(options.templates)
        self._dispatcher = EmailDispatcher(options)

    @property
    def repo(self) -> AuthRepo:
        return self._auth.repo

    @property
    def tokens(self) -> VerificationTokenService:
        return self._tokens

    async def register(self, params: UserCreate) -> RegistrationResult:  # type: ignore[override]
        """Create the account, then try to send the confirmation email.

        The account is kept even when the email fails; ``email_sent`` reports it.
        """

        user = await self._auth.register(params)

        try:
            await self.send_confirmation_email(user.email)
        except EmailDispatchError:
            logger.warning("Registered %s without a confirmation email", user.email)
            return RegistrationResult(user=user, email_sent=False)

        return RegistrationResult(user=user, email_sent=True)

    async def send_confirmation_email(self, email: str) -> None:
        await self._send_token_email(TokenPurpose.CONFIRM_EMAIL, email)

    async def confirm_email(self, email: str, token: str) -> bool:
        """Consume a confirmation token and mark the email as verified."""

        self._consume_or_raise(TokenPurpose.CONFIRM_EMAIL, email, token)
        confirmed = await self._options.repo.confirm_email(email)
        logger.info("Confirmed email %s", email)
        return confirmed

    async def send_password_reset_email(self, email: str) -> None:
        await self._send_token_email(TokenPurpose.RESET_PASSWORD, email)

    async def confirm_password_reset(self, email: str, token: str, new_password: str) -> bool:
        """Consume a reset token and store the hash of ``new_password``."""

        self._consume_or_raise(TokenPurpose.RESET_PASSWORD, email, token)
        hashed_password = self._auth.hash_password(new_password)
        updated = await self._options.repo.reset_password(email, hashed_password)
        logger.info("Reset password for %s", email)
        return updated

    async def login(
        self,
        params: UserLogin,
        claim_fields: Optional[Sequence[str]] = None,
    ) -> TokenPair:
        """Authenticate a verified account.

        Verification is checked before the password so an unverified account
        never reveals whether the password was right.
        """

        user: Optional[User] = await self._auth.repo.get_user(params.email)
        if user is None:
            raise UserNotFoundError(params.email)

        if not user.email_verified:
            raise EmailNotVerifiedError(params.email)

        if not self._auth.verify_password(params.password, user.password):
            raise InvalidCredentialsError()

        return self._auth.generate_tokens(user.id, collect_claims(user, claim_fields))

    def hash_password(self, password: str) -> str:
        return self._auth.hash_password(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self._auth.verify_password(plain_password, hashed_password)

    def generate_tokens(
        self,
        user_id: UserId,
        claims: Optional[Dict[str, Any]] = None,
    ) -> TokenPair:
        return self._auth.generate_tokens(user_id, claims)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        return await self._auth.refresh_tokens(refresh_token)

    def verify_access_token(self, access_token: str) -> Dict[str, Any]:
        return self._auth.verify_access_token(access_token)

    def revoke_refresh_token(self, user_id: UserId) -> None:
        self._auth.revoke_refresh_token(user_id)

    async def _send_token_email(self, purpose: TokenPurpose, email: str) -> None:
        token = self._tokens.issue(email, purpose)

        try:
            link = await self._options.services.for_purpose(purpose)(email, token)
            body = self._renderer.render(purpose, TemplateArgs(email=email, link=link))
        except Exception as exc:
            logger.warning(
                "Failed to prepare %s email for %s", purpose.value, email, exc_info=True
            )
            raise EmailDispatchError(purpose, email) from exc

        await self._dispatcher.dispatch(purpose, [email], body.text, body.html)

    def _consume_or_raise(self, purpose: TokenPurpose, email: str, token: str) -> None:
        if not self._tokens.verify_and_consume(email, purpose, token):
            logger.info("Rejected %s token for %s", purpose.value, email)
            raise InvalidOrExpiredTokenError(purpose, email)


def create_email_gateway(
    options: EmailPluginOptions,
    auth_core: AuthCore,
    *,
    clock: Callable[[], datetime] | None = None,
) -> EmailAuthGateway:
    """Validate ``options`` and wrap ``auth_core`` with the email flows."""

    return EmailAuthGateway(auth_core, options, clock=clock)


__all__ = ["EmailAuthGateway", "create_email_gateway"]
