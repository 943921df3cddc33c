"""Default authentication handler backed by bcrypt hashes and JWT access tokens."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from pydantic_core import to_jsonable_python

from authmail.auth.base import AuthCore, AuthRepo
from authmail.auth.exceptions import (
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from authmail.core import security
from authmail.core.config import Settings, settings as default_settings
from authmail.schemas.auth import TokenPair, User, UserCreate, UserId, UserLogin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RefreshRecord:
    user_id: UserId
    expires_at: datetime
    claims: Optional[Dict[str, Any]] = None


class AuthHandler(AuthCore):
    """Email/password authentication over a caller-supplied repository.

    Refresh tokens are opaque, kept in memory and limited to one per user:
    issuing a new pair for a user revokes the previous refresh token.
    """

    def __init__(
        self,
        repo: AuthRepo,
        *,
        config: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repo = repo
        self._config = config or default_settings
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._refresh_by_hash: dict[str, _RefreshRecord] = {}
        self._refresh_hash_by_user: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def repo(self) -> AuthRepo:
        return self._repo

    async def register(self, params: UserCreate) -> User:
        existing = await self._repo.get_user(params.email)
        if existing is not None:
            raise UserAlreadyExistsError(params.email)

        hashed = params.model_copy(update={"password": self.hash_password(params.password)})
        user = await self._repo.create_user(hashed)
        logger.info("Registered user %s", user.email)
        return user

    async def login(
        self,
        params: UserLogin,
        claim_fields: Optional[Sequence[str]] = None,
    ) -> TokenPair:
        user = await self._repo.get_user(params.email)
        if user is None:
            raise UserNotFoundError(params.email)

        if not self.verify_password(params.password, user.password):
            raise InvalidCredentialsError()

        return self.generate_tokens(user.id, collect_claims(user, claim_fields))

    def hash_password(self, password: str) -> str:
        return security.get_password_hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return security.verify_password(plain_password, hashed_password)

    def generate_tokens(
        self,
        user_id: UserId,
        claims: Optional[Dict[str, Any]] = None,
    ) -> TokenPair:
        access_token = security.create_access_token(
            subject=str(user_id),
            expires_delta=timedelta(minutes=self._config.access_token_expire_minutes),
            extra_claims=claims,
            secret_key=self._config.secret_key,
            algorithm=self._config.jwt_algorithm,
        )

        refresh_token = security.generate_secret()
        record = _RefreshRecord(
            user_id=user_id,
            expires_at=self._clock() + timedelta(minutes=self._config.refresh_token_expire_minutes),
            claims=claims,
        )
        token_hash = security.hash_secret(refresh_token)
        with self._lock:
            self._drop_refresh_locked(user_id)
            self._refresh_by_hash[token_hash] = record
            self._refresh_hash_by_user[str(user_id)] = token_hash

        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        token_hash = security.hash_secret(refresh_token)
        with self._lock:
            record = self._refresh_by_hash.pop(token_hash, None)
            if record is not None:
                self._refresh_hash_by_user.pop(str(record.user_id), None)

        if record is None:
            raise InvalidRefreshTokenError("Refresh token is invalid or has been revoked.")
        if self._clock() > record.expires_at:
            raise InvalidRefreshTokenError("Refresh token has expired.")

        return self.generate_tokens(record.user_id, record.claims)

    def verify_access_token(self, access_token: str) -> Dict[str, Any]:
        try:
            return security.decode_access_token(
                access_token,
                secret_key=self._config.secret_key,
                algorithm=self._config.jwt_algorithm,
            )
        except security.JWTError as exc:
            raise InvalidAccessTokenError("Access token is invalid or expired.") from exc

    def revoke_refresh_token(self, user_id: UserId) -> None:
        with self._lock:
            self._drop_refresh_locked(user_id)

    def _drop_refresh_locked(self, user_id: UserId) -> None:
        previous = self._refresh_hash_by_user.pop(str(user_id), None)
        if previous is not None:
            self._refresh_by_hash.pop(previous, None)


def collect_claims(user: User, claim_fields: Optional[Sequence[str]]) -> Optional[Dict[str, Any]]:
    """Copy the requested user attributes into a JSON-safe claims mapping."""

    if not claim_fields:
        return None
    return {field: to_jsonable_python(getattr(user, field, None)) for field in claim_fields}


__all__ = ["AuthHandler", "collect_claims"]
