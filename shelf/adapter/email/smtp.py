"""SMTP email client.

smtplib is blocking, so each send runs in a worker thread.
"""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import logfire

from shelf.adapter.error import DeliveryError
from shelf.config import EmailSettings
from shelf.domain.service.email_service import EmailClient, EmailMessage


class SmtpEmailClient(EmailClient):
    """Email client talking to an SMTP relay."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP client.

        Args:
            settings: SMTP host, credentials and sender
        """
        self.settings = settings

    def is_configured(self) -> bool:
        """Host, user and password must all be set."""
        return bool(self.settings.host and self.settings.user and self.settings.password)

    async def send(self, message: EmailMessage) -> None:
        """Deliver a message through the relay.

        Raises:
            DeliveryError: If the relay refuses or cannot be reached
        """
        if not self.is_configured():
            raise DeliveryError("SMTP is not configured")
        await asyncio.to_thread(self._send_sync, self._build(message))

    def _build(self, message: EmailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = self.settings.from_address
        msg["To"] = message.to
        msg.attach(MIMEText(message.text, "plain"))
        msg.attach(MIMEText(message.html, "html"))
        return msg

    def _send_sync(self, msg: MIMEMultipart) -> None:
        settings = self.settings
        try:
            if settings.secure:
                server: smtplib.SMTP = smtplib.SMTP_SSL(
                    settings.host, settings.port, timeout=30
                )
            else:
                server = smtplib.SMTP(settings.host, settings.port, timeout=30)
            with server:
                if not settings.secure:
                    server.starttls()
                server.login(settings.user, settings.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logfire.error(
                "SMTP send failed", host=settings.host, to=msg["To"], error=str(e)
            )
            raise DeliveryError(f"SMTP send failed: {e}")


class MockEmailClient(EmailClient):
    """Mock email client for testing.

    Records every message instead of sending it. ``fail`` makes each send
    raise, to exercise the best-effort path.
    """

    def __init__(self, configured: bool = True, fail: bool = False):
        """Initialize mock client."""
        self.configured = configured
        self.fail = fail
        self.sent: list[EmailMessage] = []

    def is_configured(self) -> bool:
        """Return the configured flag."""
        return self.configured

    async def send(self, message: EmailMessage) -> None:
        """Record the message, or fail if asked to."""
        if self.fail:
            raise DeliveryError("Mock delivery failure")
        self.sent.append(message)
