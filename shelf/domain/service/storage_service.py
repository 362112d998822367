"""Blob storage domain service."""

import logfire

from .base import Service


class BlobStorageClient:
    """Generic blob storage interface."""

    async def delete_artifact(self, url: str) -> None:
        """Delete one stored artifact.

        Args:
            url: Public URL of the artifact

        Raises:
            StorageError: If the storage service rejects the request
        """
        raise NotImplementedError


class StorageService(Service):
    """Domain service for removing stored artifacts."""

    def __init__(self, storage_client: BlobStorageClient) -> None:
        """Initialize storage service.

        Args:
            storage_client: Blob storage client
        """
        self.storage_client = storage_client

    async def delete_artifacts(self, urls: list[str]) -> int:
        """Delete artifacts one by one, continuing past failures.

        A dangling blob is tolerated; the caller goes on to delete the
        database rows regardless.

        Args:
            urls: Artifact URLs

        Returns:
            Number of artifacts deleted successfully
        """
        with logfire.span("storage_service.delete_artifacts", count=len(urls)):
            deleted = 0
            for url in urls:
                try:
                    await self.storage_client.delete_artifact(url)
                    deleted += 1
                except Exception as e:
                    logfire.error("Artifact deletion failed", url=url, error=str(e))
            logfire.info(
                "Artifacts deleted", requested=len(urls), deleted=deleted
            )
            return deleted
