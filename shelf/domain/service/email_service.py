"""Invitation email domain service.

Delivery is best effort: a failed send is logged and reported to the
caller, never raised, so issuing an invitation cannot fail because of mail.
"""

from datetime import datetime

import logfire

from shelf.domain.value.common import ValueObject

from .base import Service

APP_NAME = "Shelf"


class EmailMessage(ValueObject):
    """Outgoing email with plain-text and HTML bodies."""

    to: str
    subject: str
    text: str
    html: str


class EmailClient:
    """Generic email delivery interface."""

    def is_configured(self) -> bool:
        """Whether the client has what it needs to send."""
        raise NotImplementedError

    async def send(self, message: EmailMessage) -> None:
        """Deliver a message.

        Args:
            message: Message to send

        Raises:
            DeliveryError: If delivery fails
        """
        raise NotImplementedError


class EmailService(Service):
    """Domain service composing and sending invitation emails."""

    def __init__(self, email_client: EmailClient) -> None:
        """Initialize email service.

        Args:
            email_client: Delivery client
        """
        self.email_client = email_client

    def validate_email_config(self) -> bool:
        """Check whether delivery should be attempted at all."""
        return self.email_client.is_configured()

    async def send_invitation_email(
        self, to: str, invite_link: str, expires_at: datetime
    ) -> bool:
        """Send an invitation email.

        Args:
            to: Recipient address
            invite_link: Link that opens the invitation
            expires_at: Invitation expiry, shown to the recipient

        Returns:
            True if the message was handed to the mail server
        """
        with logfire.span("email_service.send_invitation_email", to=to):
            message = build_invitation_message(to, invite_link, expires_at)
            try:
                await self.email_client.send(message)
            except Exception as e:
                logfire.error("Invitation email failed", to=to, error=str(e))
                return False
            logfire.info("Invitation email sent", to=to)
            return True


def format_expiry(expires_at: datetime) -> str:
    """Format an expiry date like 'March 5, 2026'."""
    return f"{expires_at:%B} {expires_at.day}, {expires_at.year}"


def build_invitation_message(
    to: str, invite_link: str, expires_at: datetime
) -> EmailMessage:
    """Render the invitation email.

    Args:
        to: Recipient address
        invite_link: Link that opens the invitation
        expires_at: Invitation expiry

    Returns:
        Message ready for delivery
    """
    expiry = format_expiry(expires_at)

    text = f"""Hello,

You have been invited to join {APP_NAME} - a shared library for EPUB and PDF files.

Click the link below to accept your invitation:
{invite_link}

This invitation will expire on {expiry}.

If you did not expect this invitation, you can safely ignore this email.

Best regards,
{APP_NAME} Team"""

    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Invitation to {APP_NAME}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: #f8f9fa; border-radius: 8px; padding: 30px; margin-bottom: 20px;">
    <h1 style="color: #2563eb; margin-top: 0;">Welcome to {APP_NAME}</h1>
    <p style="font-size: 16px;">You have been invited to join {APP_NAME} - a shared library for EPUB and PDF files.</p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{invite_link}" style="display: inline-block; background-color: #2563eb; color: white; padding: 12px 30px; text-decoration: none; border-radius: 5px; font-weight: bold;">Accept Invitation</a>
    </div>
    <p style="font-size: 14px; color: #666;">Or copy and paste this link into your browser:</p>
    <p style="font-size: 14px; background-color: white; padding: 10px; border-radius: 4px; word-break: break-all; border: 1px solid #ddd;">{invite_link}</p>
    <p style="font-size: 14px; color: #666; margin-top: 20px;">
      <strong>Note:</strong> This invitation will expire on <strong>{expiry}</strong>.
    </p>
  </div>
  <p style="font-size: 12px; color: #999; text-align: center;">
    If you did not expect this invitation, you can safely ignore this email.
  </p>
</body>
</html>"""

    return EmailMessage(
        to=to,
        subject=f"You are invited to {APP_NAME}",
        text=text,
        html=html,
    )
