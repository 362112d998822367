"""Blob storage HTTP client."""

import httpx
import logfire

from shelf.adapter.error import StorageError
from shelf.config import StorageSettings
from shelf.domain.service.storage_service import BlobStorageClient


class HttpBlobStorageClient(BlobStorageClient):
    """Deletes artifacts through the blob store's HTTP API."""

    def __init__(self, settings: StorageSettings) -> None:
        """Initialize blob client.

        Args:
            settings: API URL, token and timeout
        """
        self.settings = settings

    async def delete_artifact(self, url: str) -> None:
        """Delete one artifact by its public URL.

        Raises:
            StorageError: If the request fails or is rejected
        """
        if not self.settings.token:
            raise StorageError("Blob storage token is not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.settings.api_url}/delete",
                    json={"urls": [url]},
                    headers={"Authorization": f"Bearer {self.settings.token}"},
                    timeout=self.settings.timeout_seconds,
                )

                if response.status_code >= 400:
                    logfire.error(
                        "Blob deletion rejected",
                        url=url,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise StorageError(f"Blob deletion failed: {response.status_code}")

        except httpx.HTTPError as e:
            logfire.error("Blob deletion HTTP error", url=url, error=str(e))
            raise StorageError(f"HTTP error deleting blob: {e}")


class MockBlobStorageClient(BlobStorageClient):
    """Mock blob client for testing.

    Records deleted URLs. URLs listed in ``failing`` raise instead.
    """

    def __init__(self):
        """Initialize mock client."""
        self.deleted: list[str] = []
        self.failing: set[str] = set()

    async def delete_artifact(self, url: str) -> None:
        """Record the deletion, or fail for URLs marked as failing."""
        if url in self.failing:
            raise StorageError(f"Mock failure for {url}")
        self.deleted.append(url)
