"""Helpers for verification token lifecycle."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping, Optional

from authmail.core.security import generate_secret, hash_secret, secrets_match
from authmail.schemas.email import TokenPurpose

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTLS: Mapping[TokenPurpose, timedelta] = {
    TokenPurpose.CONFIRM_EMAIL: timedelta(days=1),
    TokenPurpose.RESET_PASSWORD: timedelta(hours=1),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class VerificationToken:
    """A pending token. Only the SHA-256 digest of the secret is kept."""

    subject: str
    purpose: TokenPurpose
    secret_hash: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class TokenRegistry:
    """Per-purpose mapping of subject to its single pending token.

    Not synchronized. ``VerificationTokenService`` owns its registry and
    serializes every access.
    """

    def __init__(self) -> None:
        self._tokens: dict[TokenPurpose, dict[str, VerificationToken]] = {
            purpose: {} for purpose in TokenPurpose
        }

    def put(self, token: VerificationToken) -> Optional[VerificationToken]:
        """Store ``token``, returning the entry it replaced, if any."""

        bucket = self._tokens[token.purpose]
        previous = bucket.get(token.subject)
        bucket[token.subject] = token
        return previous

    def get(self, subject: str, purpose: TokenPurpose) -> Optional[VerificationToken]:
        return self._tokens[purpose].get(subject)

    def remove(self, subject: str, purpose: TokenPurpose) -> None:
        self._tokens[purpose].pop(subject, None)

    def purge_expired(self, now: datetime) -> int:
        """Remove all expired tokens.

        Returns:
            Number of tokens removed.
        """
        removed = 0
        for bucket in self._tokens.values():
            expired = [subject for subject, token in bucket.items() if token.is_expired(now)]
            for subject in expired:
                del bucket[subject]
            removed += len(expired)
        return removed

    def count(self, purpose: TokenPurpose) -> int:
        return len(self._tokens[purpose])

    def clear(self) -> None:
        for bucket in self._tokens.values():
            bucket.clear()


class VerificationTokenService:
    """Issue, verify and consume single-use tokens with a per-purpose TTL.

    Every registry access happens under one lock, so a token can be consumed
    at most once even when verified concurrently from threads or tasks.
    """

    def __init__(
        self,
        ttls: Mapping[TokenPurpose, timedelta] | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ttls = dict(DEFAULT_TOKEN_TTLS)
        if ttls:
            self._ttls.update(ttls)
        self._registry = TokenRegistry()
        self._clock = clock or utc_now
        self._lock = threading.Lock()

    def ttl_for(self, purpose: TokenPurpose) -> timedelta:
        return self._ttls[purpose]

    def issue(self, subject: str, purpose: TokenPurpose) -> str:
        """Create a token for ``(subject, purpose)`` and return the raw secret.

        Any previously pending token for the same pair stops verifying.
        """

        raw_secret = generate_secret()
        now = self._clock()
        token = VerificationToken(
            subject=subject,
            purpose=purpose,
            secret_hash=hash_secret(raw_secret),
            issued_at=now,
            expires_at=now + self._ttls[purpose],
        )
        with self._lock:
            previous = self._registry.put(token)

        if previous is not None:
            logger.debug("Superseded pending %s token for %s", purpose.value, subject)
        logger.debug("Issued %s token for %s expiring at %s", purpose.value, subject, token.expires_at)
        return raw_secret

    def verify_and_consume(self, subject: str, purpose: TokenPurpose, candidate: str) -> bool:
        """Return True exactly once for the pending secret of ``(subject, purpose)``.

        Expired entries are removed when looked up. A wrong secret leaves the
        pending entry untouched.
        """

        with self._lock:
            token = self._registry.get(subject, purpose)
            if token is None:
                return False

            if token.is_expired(self._clock()):
                self._registry.remove(subject, purpose)
                logger.info("Discarded expired %s token for %s", purpose.value, subject)
                return False

            if not secrets_match(candidate, token.secret_hash):
                return False

            self._registry.remove(subject, purpose)

        logger.debug("Consumed %s token for %s", purpose.value, subject)
        return True

    def has_pending(self, subject: str, purpose: TokenPurpose) -> bool:
        """Whether a token for the pair is stored, expired or not."""

        with self._lock:
            return self._registry.get(subject, purpose) is not None

    def pending_token(self, subject: str, purpose: TokenPurpose) -> Optional[VerificationToken]:
        """Snapshot of the stored entry for the pair, if any."""

        with self._lock:
            return self._registry.get(subject, purpose)

    def pending_count(self, purpose: TokenPurpose) -> int:
        with self._lock:
            return self._registry.count(purpose)

    def purge_expired(self) -> int:
        with self._lock:
            removed = self._registry.purge_expired(self._clock())
        if removed:
            logger.info("Purged %d expired verification tokens", removed)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._registry.clear()
        logger.debug("Cleared all pending verification tokens")


__all__ = [
    "DEFAULT_TOKEN_TTLS",
    "TokenRegistry",
    "VerificationToken",
    "VerificationTokenService",
    "utc_now",
]
