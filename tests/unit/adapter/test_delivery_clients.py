"""Unit tests for the SMTP and blob storage clients."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from shelf.adapter.blob.client import HttpBlobStorageClient
from shelf.adapter.email.smtp import SmtpEmailClient
from shelf.adapter.error import DeliveryError, StorageError
from shelf.config import EmailSettings, StorageSettings
from shelf.domain.service.email_service import (
    EmailService,
    build_invitation_message,
    format_expiry,
)
from shelf.domain.service.storage_service import StorageService


def mock_async_client(response=None, error=None):
    """Patchable stand-in for ``httpx.AsyncClient`` used as a context manager."""
    client = MagicMock()
    client.post = AsyncMock(return_value=response, side_effect=error)
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=client)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context), client


class TestSmtpEmailClient:
    """Tests for SmtpEmailClient."""

    def test_configured_needs_host_user_and_password(self):
        """All three settings must be present."""
        assert not SmtpEmailClient(EmailSettings()).is_configured()
        assert not SmtpEmailClient(
            EmailSettings(host="smtp.example.com", user="u")
        ).is_configured()
        assert SmtpEmailClient(
            EmailSettings(host="smtp.example.com", user="u", password="p")
        ).is_configured()

    @pytest.mark.asyncio
    async def test_send_unconfigured_raises(self):
        """Sending without settings is a delivery error."""
        # Arrange
        client = SmtpEmailClient(EmailSettings())
        message = build_invitation_message(
            "a@example.com", "https://x/invite/t", datetime.now(timezone.utc)
        )

        # Act & Assert
        with pytest.raises(DeliveryError):
            await client.send(message)

    def test_build_has_text_and_html_parts(self):
        """The MIME message is multipart/alternative with both bodies."""
        # Arrange
        client = SmtpEmailClient(EmailSettings(from_address="noreply@shelf.example.com"))
        message = build_invitation_message(
            "a@example.com", "https://x/invite/t", datetime(2026, 3, 5, tzinfo=timezone.utc)
        )

        # Act
        mime = client._build(message)

        # Assert
        assert mime["To"] == "a@example.com"
        assert mime["From"] == "noreply@shelf.example.com"
        assert [p.get_content_type() for p in mime.get_payload()] == [
            "text/plain",
            "text/html",
        ]


class TestInvitationEmail:
    """Tests for the invitation message and best-effort delivery."""

    def test_expiry_format(self):
        """Dates read like 'March 5, 2026'."""
        assert format_expiry(datetime(2026, 3, 5, tzinfo=timezone.utc)) == "March 5, 2026"

    def test_message_contains_link_and_expiry(self):
        """Both bodies carry the link and the expiry date."""
        # Act
        message = build_invitation_message(
            "a@example.com",
            "https://api.shelf.example.com/invite/tok",
            datetime(2026, 3, 5, tzinfo=timezone.utc),
        )

        # Assert
        assert message.to == "a@example.com"
        for body in (message.text, message.html):
            assert "https://api.shelf.example.com/invite/tok" in body
            assert "March 5, 2026" in body

    @pytest.mark.asyncio
    async def test_failed_send_returns_false(self):
        """Delivery errors are swallowed and reported."""
        # Arrange
        client = MagicMock()
        client.send = AsyncMock(side_effect=DeliveryError("down"))
        service = EmailService(client)

        # Act
        sent = await service.send_invitation_email(
            "a@example.com", "https://x/invite/t", datetime.now(timezone.utc)
        )

        # Assert
        assert sent is False


class TestHttpBlobStorageClient:
    """Tests for HttpBlobStorageClient."""

    @pytest.mark.asyncio
    async def test_missing_token(self):
        """Deletion needs an API token."""
        # Arrange
        client = HttpBlobStorageClient(StorageSettings(token=""))

        # Act & Assert
        with pytest.raises(StorageError):
            await client.delete_artifact("https://blob.example.com/a.epub")

    @pytest.mark.asyncio
    async def test_delete_posts_url(self):
        """The artifact URL is sent to the delete endpoint."""
        # Arrange
        settings = StorageSettings(api_url="https://blob.example.com", token="tok")
        client = HttpBlobStorageClient(settings)
        factory, http = mock_async_client(response=httpx.Response(200))

        # Act
        with patch("shelf.adapter.blob.client.httpx.AsyncClient", factory):
            await client.delete_artifact("https://blob.example.com/a.epub")

        # Assert
        http.post.assert_awaited_once()
        args, kwargs = http.post.call_args
        assert args[0] == "https://blob.example.com/delete"
        assert kwargs["json"] == {"urls": ["https://blob.example.com/a.epub"]}
        assert kwargs["headers"]["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_rejected_delete(self):
        """Error statuses become StorageError."""
        # Arrange
        client = HttpBlobStorageClient(StorageSettings(token="tok"))
        factory, _ = mock_async_client(response=httpx.Response(403, text="nope"))

        # Act & Assert
        with patch("shelf.adapter.blob.client.httpx.AsyncClient", factory):
            with pytest.raises(StorageError):
                await client.delete_artifact("https://blob.example.com/a.epub")

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Transport errors become StorageError."""
        # Arrange
        client = HttpBlobStorageClient(StorageSettings(token="tok"))
        factory, _ = mock_async_client(error=httpx.ConnectError("refused"))

        # Act & Assert
        with patch("shelf.adapter.blob.client.httpx.AsyncClient", factory):
            with pytest.raises(StorageError):
                await client.delete_artifact("https://blob.example.com/a.epub")

    @pytest.mark.asyncio
    async def test_storage_service_continues_past_failures(self):
        """One failing artifact does not stop the others."""
        # Arrange
        storage_client = MagicMock()
        storage_client.delete_artifact = AsyncMock(
            side_effect=[StorageError("gone"), None, None]
        )
        service = StorageService(storage_client)

        # Act
        deleted = await service.delete_artifacts(["a", "b", "c"])

        # Assert
        assert deleted == 2
        assert storage_client.delete_artifact.await_count == 3
