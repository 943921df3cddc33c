"""Tests covering authentication API endpoints."""

from __future__ import annotations

from jose import jwt


def _confirm(user_repo, email: str) -> None:
    user_repo.users[email].email_verified = True


def test_health_check(client) -> None:
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_register_creates_user(client, email_client, user_repo) -> None:
    """Test registering a user sends a confirmation email."""
    payload = {"email": "new-user@example.com", "password": "password123"}
    response = client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == payload["email"]
    assert data["id"] == 1
    assert data["email_verified"] is False
    assert data["email_sent"] is True
    assert payload["email"] in user_repo.users
    assert len(email_client.sent) == 1


def test_register_duplicate_email_returns_400(client) -> None:
    """Test registering an existing email."""
    payload = {"email": "duplicate@example.com", "password": "password123"}
    first = client.post("/api/v1/auth/register", json=payload)
    assert first.status_code == 201
    second = client.post("/api/v1/auth/register", json=payload)
    assert second.status_code == 400
    assert second.json()["detail"]


def test_register_rejects_short_password(client) -> None:
    """Test registering with a password that is too short."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "password": "short"},
    )
    assert response.status_code == 422


def test_login_returns_token(client, user_repo, test_settings) -> None:
    """Test logging in with a confirmed account."""
    credentials = {"email": "login@example.com", "password": "password123"}
    client.post("/api/v1/auth/register", json=credentials)
    _confirm(user_repo, credentials["email"])

    response = client.post("/api/v1/auth/login", json=credentials)
    assert response.status_code == 200
    token_payload = response.json()
    assert token_payload["token_type"] == "bearer"
    decoded = jwt.decode(
        token_payload["access_token"],
        test_settings.secret_key,
        algorithms=[test_settings.jwt_algorithm],
    )
    assert decoded["sub"] == "1"


def test_login_rejects_bad_password(client, user_repo) -> None:
    """Test logging in with a wrong password."""
    credentials = {"email": "badpass@example.com", "password": "password123"}
    client.post("/api/v1/auth/register", json=credentials)
    _confirm(user_repo, credentials["email"])

    response = client.post(
        "/api/v1/auth/login",
        json={"email": credentials["email"], "password": "wrongpass"},
    )
    assert response.status_code == 401


def test_login_rejects_unknown_user(client) -> None:
    """Test logging in with an unknown email."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "missing@example.com", "password": "password123"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password."


def test_login_rejects_unconfirmed_user(client) -> None:
    """Test logging in before confirming the email."""
    credentials = {"email": "pending@example.com", "password": "password123"}
    client.post("/api/v1/auth/register", json=credentials)

    response = client.post("/api/v1/auth/login", json=credentials)
    assert response.status_code == 403
    assert "confirm" in response.json()["detail"].lower()


def test_refresh_rotates_tokens(client, user_repo) -> None:
    """Test refreshing tokens and replaying the old refresh token."""
    credentials = {"email": "refresh@example.com", "password": "password123"}
    client.post("/api/v1/auth/register", json=credentials)
    _confirm(user_repo, credentials["email"])
    tokens = client.post("/api/v1/auth/login", json=credentials).json()

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["refresh_token"] != tokens["refresh_token"]

    replay = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert replay.status_code == 401
