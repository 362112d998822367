"""Blob storage infrastructure providers."""

from dishka import Scope, provide

from shelf.adapter.blob.client import HttpBlobStorageClient
from shelf.config import StorageSettings
from shelf.domain.service import BlobStorageClient
from shelf.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Blob storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production blob storage provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_storage_client(self, storage_settings: StorageSettings) -> BlobStorageClient:
        """Provide HTTP blob storage client."""
        return HttpBlobStorageClient(settings=storage_settings)
