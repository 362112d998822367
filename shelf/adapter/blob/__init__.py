"""Blob storage adapter."""

from .client import HttpBlobStorageClient, MockBlobStorageClient

__all__ = ["HttpBlobStorageClient", "MockBlobStorageClient"]
