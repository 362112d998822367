"""Email infrastructure providers."""

from dishka import Scope, provide

from shelf.adapter.email.smtp import SmtpEmailClient
from shelf.config import EmailSettings
from shelf.domain.service import EmailClient
from shelf.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider using SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_client(self, email_settings: EmailSettings) -> EmailClient:
        """Provide SMTP email client.

        An unconfigured client is still provided; invitations are then
        created without sending mail.
        """
        return SmtpEmailClient(settings=email_settings)
