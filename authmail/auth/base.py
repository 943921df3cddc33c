"""Abstract base classes for the authentication core and its repository."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from authmail.schemas.auth import TokenPair, User, UserCreate, UserId, UserLogin


class AuthRepo(ABC):
    """Persistence boundary for user records, owned by the caller."""

    @abstractmethod
    async def get_user(self, email: str) -> Optional[User]:
        """Return the user registered with ``email`` or ``None``."""
        pass

    @abstractmethod
    async def create_user(self, params: UserCreate) -> User:
        """Persist a new user. ``params.password`` is already hashed."""
        pass


class AuthCore(ABC):
    """Capability surface of an authentication handler."""

    @property
    @abstractmethod
    def repo(self) -> AuthRepo:
        """Repository backing this handler."""
        pass

    @abstractmethod
    async def register(self, params: UserCreate) -> User:
        """Create an account and return the stored user."""
        pass

    @abstractmethod
    async def login(
        self,
        params: UserLogin,
        claim_fields: Optional[Sequence[str]] = None,
    ) -> TokenPair:
        """Authenticate by email/password and issue tokens."""
        pass

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        pass

    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Compare a plaintext password with a stored hash."""
        pass

    @abstractmethod
    def generate_tokens(
        self,
        user_id: UserId,
        claims: Optional[Dict[str, Any]] = None,
    ) -> TokenPair:
        """Issue an access/refresh token pair for ``user_id``."""
        pass

    @abstractmethod
    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """Rotate a refresh token and issue a new pair."""
        pass

    @abstractmethod
    def verify_access_token(self, access_token: str) -> Dict[str, Any]:
        """Return the claims of a valid access token."""
        pass

    @abstractmethod
    def revoke_refresh_token(self, user_id: UserId) -> None:
        """Invalidate the outstanding refresh token of ``user_id``."""
        pass


__all__ = ["AuthCore", "AuthRepo"]
