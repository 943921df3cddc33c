"""Shared pytest fixtures for authmail tests."""

from __future__ import annotations

import asyncio
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from authmail.api import create_app
from authmail.auth import AuthHandler, AuthRepo
from authmail.core.config import Settings
from authmail.schemas import OutgoingEmail, User, UserCreate
from authmail.services import (
    EmailAuthGateway,
    EmailClient,
    EmailDeliveryError,
    EmailPluginOptions,
    LinkServices,
    RepoHooks,
)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class InMemoryAuthRepo(AuthRepo):
    """User store plus the confirm/reset repository hooks."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.confirmed: list[str] = []
        self.password_resets: list[tuple[str, str]] = []

    async def get_user(self, email: str) -> Optional[User]:
        return self.users.get(email)

    async def create_user(self, params: UserCreate) -> User:
        user = User(
            id=len(self.users) + 1,
            email=params.email,
            password=params.password,
            email_verified=False,
        )
        self.users[user.email] = user
        return user

    async def confirm_email(self, email: str) -> bool:
        self.confirmed.append(email)
        user = self.users.get(email)
        if user is None:
            return False
        user.email_verified = True
        return True

    async def reset_password(self, email: str, hashed_password: str) -> bool:
        self.password_resets.append((email, hashed_password))
        user = self.users.get(email)
        if user is None:
            return False
        user.password = hashed_password
        return True


class RecordingEmailClient(EmailClient):
    """Collect outbound messages instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[OutgoingEmail] = []

    async def send(self, message: OutgoingEmail) -> None:
        self.sent.append(message)


class FailingEmailClient(EmailClient):
    """Transport that is always down."""

    def __init__(self) -> None:
        self.attempts = 0

    async def send(self, message: OutgoingEmail) -> None:
        self.attempts += 1
        raise EmailDeliveryError("SMTP server unavailable")


async def create_confirm_email_link(email: str, token: str) -> str:
    return f"http://mysite.com/confirm-email?token={token}"


async def create_reset_password_link(email: str, token: str) -> str:
    return f"http://mysite.com/reset-password?token={token}"


def extract_token(message: OutgoingEmail) -> str:
    """Pull the token query parameter out of the link in a sent email."""

    link = message.text.rsplit(" ", 1)[-1]
    token = parse_qs(urlparse(link).query).get("token", [None])[0]
    assert token is not None
    return token


class SyncASGITestClient:
    """Synchronous wrapper around httpx.AsyncClient for ASGI apps."""

    def __init__(self, app) -> None:
        transport = httpx.ASGITransport(app=app)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return asyncio.run(self._client.request(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def __enter__(self) -> "SyncASGITestClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        asyncio.run(self._client.aclose())


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        EMAIL_SENDER_NAME="Sender Name",
        EMAIL_SENDER="sender@example.com",
        JWT_SECRET_KEY="test-secret-key",
    )


@pytest.fixture()
def user_repo() -> InMemoryAuthRepo:
    return InMemoryAuthRepo()


@pytest.fixture()
def email_client() -> RecordingEmailClient:
    return RecordingEmailClient()


@pytest.fixture()
def link_services() -> LinkServices:
    return LinkServices(
        create_confirm_email_link=create_confirm_email_link,
        create_reset_password_link=create_reset_password_link,
    )


@pytest.fixture()
def plugin_options(
    email_client: RecordingEmailClient,
    link_services: LinkServices,
    user_repo: InMemoryAuthRepo,
) -> EmailPluginOptions:
    """Minimum valid plugin configuration."""

    return EmailPluginOptions(
        sender_name="Sender Name",
        sender_email="sender@example.com",
        client=email_client,
        services=link_services,
        repo=RepoHooks(
            confirm_email=user_repo.confirm_email,
            reset_password=user_repo.reset_password,
        ),
    )


@pytest.fixture()
def auth_handler(user_repo: InMemoryAuthRepo, test_settings: Settings, clock: FakeClock) -> AuthHandler:
    return AuthHandler(user_repo, config=test_settings, clock=clock)


@pytest.fixture()
def gateway(
    auth_handler: AuthHandler,
    plugin_options: EmailPluginOptions,
    clock: FakeClock,
) -> EmailAuthGateway:
    return EmailAuthGateway(auth_handler, plugin_options, clock=clock)


@pytest.fixture()
def client(gateway: EmailAuthGateway) -> Generator[SyncASGITestClient, None, None]:
    """Synchronous test client backed by httpx's ASGI transport."""

    with SyncASGITestClient(create_app(gateway)) as test_client:
        yield test_client


@pytest.fixture()
def user_credentials() -> dict[str, str]:
    """Default credentials used to register/login test users."""

    return {"email": "user@email.com", "password": "password123"}


@pytest.fixture()
def failing_email_client() -> FailingEmailClient:
    return FailingEmailClient()


@pytest.fixture()
def token_from():
    """Return a helper extracting the token from a sent email."""

    return extract_token
