"""Utilities for sending transactional emails."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import formataddr
from typing import Iterable, Mapping, Optional

import httpx

from authmail.core.config import Settings, settings as default_settings
from authmail.exceptions import EmailDispatchError
from authmail.schemas.email import OutgoingEmail, TokenPurpose
from authmail.services.options import EmailPluginOptions
from authmail.services.resolvers import constant, first_match

logger = logging.getLogger(__name__)

DEFAULT_SUBJECTS: Mapping[TokenPurpose, str] = {
    TokenPurpose.CONFIRM_EMAIL: "Confirm your email",
    TokenPurpose.RESET_PASSWORD: "Reset Password",
}


class EmailDeliveryError(Exception):
    """Raised when an email could not be delivered."""


class EmailClient(ABC):
    """Transport that delivers a fully resolved message."""

    @abstractmethod
    async def send(self, message: OutgoingEmail) -> None:
        """Deliver ``message``; raise on failure."""
        pass


def build_mime_message(message: OutgoingEmail) -> EmailMessage:
    """Construct a multipart text/html MIME message."""

    mime = EmailMessage()
    mime["Subject"] = message.subject
    mime["From"] = formataddr((message.sender_name, message.from_address))
    mime["To"] = ", ".join(message.to)
    mime.set_content(message.text)
    mime.add_alternative(message.html, subtype="html")
    return mime


class SmtpEmailClient(EmailClient):
    """Send messages through an SMTP server from a worker thread."""

    def __init__(self, config: Settings | None = None) -> None:
        self._config = config or default_settings

    async def send(self, message: OutgoingEmail) -> None:
        await asyncio.to_thread(self._send_sync, build_mime_message(message))

    def _send_sync(self, mime: EmailMessage) -> None:
        host = self._config.smtp_host
        port = self._config.smtp_port
        username = self._config.smtp_username or None
        password = self._config.smtp_password or None

        try:
            with smtplib.SMTP(host=host, port=port) as smtp:
                if self._config.smtp_use_tls:
                    smtp.starttls()
                if username and password:
                    smtp.login(username, password)
                smtp.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError("Failed to send email") from exc


class HttpEmailClient(EmailClient):
    """Send messages by POSTing JSON to an HTTP email API (Resend-compatible)."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or default_settings
        self._transport = transport

    async def send(self, message: OutgoingEmail) -> None:
        payload = {
            "from": formataddr((message.sender_name, message.from_address)),
            "to": list(message.to),
            "subject": message.subject,
            "text": message.text,
            "html": message.html,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    self._config.email_api_url,
                    headers={"Authorization": f"Bearer {self._config.email_api_key}"},
                    json=payload,
                    timeout=self._config.email_api_timeout_seconds,
                )
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmailDeliveryError("Failed to send email") from exc


class EmailDispatcher:
    """Resolve sender fields for a purpose and hand the message to the client."""

    def __init__(self, options: EmailPluginOptions) -> None:
        self._options = options

    def build_message(
        self,
        purpose: TokenPurpose,
        to: Iterable[str],
        text: str,
        html: str,
        subject: Optional[str] = None,
    ) -> OutgoingEmail:
        overrides = self._options.overrides(purpose)
        return OutgoingEmail(
            sender_name=first_match(
                [constant(overrides.sender_name)],
                self._options.sender_name or "",
            ),
            from_address=first_match(
                [constant(overrides.from_address)],
                self._options.sender_email or "",
            ),
            to=tuple(to),
            subject=first_match(
                [constant(overrides.subject), constant(subject)],
                DEFAULT_SUBJECTS[purpose],
            ),
            text=text,
            html=html,
        )

    async def dispatch(
        self,
        purpose: TokenPurpose,
        to: Iterable[str],
        text: str,
        html: str,
        subject: Optional[str] = None,
    ) -> None:
        """Send one message, raising ``EmailDispatchError`` if it cannot be built or sent."""

        recipients = tuple(to)
        recipient = ", ".join(recipients)
        try:
            message = self.build_message(purpose, recipients, text, html, subject)
            await self._options.client.send(message)
        except Exception as exc:
            logger.warning(
                "Failed to dispatch %s email to %s", purpose.value, recipient, exc_info=True
            )
            raise EmailDispatchError(purpose, recipient) from exc

        logger.info("Dispatched %s email to %s", purpose.value, recipient)


__all__ = [
    "DEFAULT_SUBJECTS",
    "EmailClient",
    "EmailDeliveryError",
    "EmailDispatcher",
    "HttpEmailClient",
    "SmtpEmailClient",
    "build_mime_message",
]
