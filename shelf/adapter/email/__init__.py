"""SMTP email adapter."""

from .smtp import MockEmailClient, SmtpEmailClient

__all__ = ["SmtpEmailClient", "MockEmailClient"]
