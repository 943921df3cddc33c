"""Library configuration using Pydantic settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings sourced from environment variables and .env files."""

    email_sender_name: str = Field(
        default="",
        alias="EMAIL_SENDER_NAME",
    )
    email_sender: str = Field(
        default="",
        alias="EMAIL_SENDER",
    )

    smtp_host: str = Field(
        default="localhost",
        alias="SMTP_HOST",
    )
    smtp_port: int = Field(
        default=1025,
        alias="SMTP_PORT",
    )
    smtp_username: Optional[str] = Field(
        default=None,
        alias="SMTP_USERNAME",
    )
    smtp_password: Optional[str] = Field(
        default=None,
        alias="SMTP_PASSWORD",
    )
    smtp_use_tls: bool = Field(
        default=False,
        alias="SMTP_USE_TLS",
    )

    email_api_url: str = Field(
        default="https://api.resend.com/emails",
        alias="EMAIL_API_URL",
    )
    email_api_key: str = Field(
        default="",
        alias="EMAIL_API_KEY",
    )
    email_api_timeout_seconds: float = Field(
        default=10.0,
        alias="EMAIL_API_TIMEOUT_SECONDS",
    )

    email_confirmation_token_expiry_minutes: int = Field(
        default=60 * 24,
        alias="EMAIL_CONFIRMATION_TOKEN_EXPIRY_MINUTES",
    )
    password_reset_token_expiry_minutes: int = Field(
        default=60,
        alias="PASSWORD_RESET_TOKEN_EXPIRY_MINUTES",
    )

    secret_key: str = Field(
        default="dev-secret-key",
        alias="JWT_SECRET_KEY",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
    )
    access_token_expire_minutes: int = Field(
        default=30,
        alias="JWT_ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    refresh_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="JWT_REFRESH_TOKEN_EXPIRE_MINUTES",
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()

__all__ = ["Settings", "settings"]
