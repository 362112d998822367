"""Media use cases."""

from .common import MediaFileItem, MediaItem
from .delete_media import DeleteMediaRequest, DeleteMediaResponse, DeleteMediaUseCase
from .get_media import GetMediaRequest, GetMediaUseCase
from .list_deleted_media import (
    DeletedMediaItem,
    ListDeletedMediaRequest,
    ListDeletedMediaResponse,
    ListDeletedMediaUseCase,
)
from .list_media import ListMediaRequest, ListMediaResponse, ListMediaUseCase
from .purge_media import PurgeMediaRequest, PurgeMediaResponse, PurgeMediaUseCase
from .restore_media import RestoreMediaRequest, RestoreMediaUseCase
from .update_media import UpdateMediaRequest, UpdateMediaUseCase
from .upload_media import UploadMediaRequest, UploadMediaUseCase

__all__ = [
    "DeleteMediaRequest",
    "DeleteMediaResponse",
    "DeleteMediaUseCase",
    "DeletedMediaItem",
    "GetMediaRequest",
    "GetMediaUseCase",
    "ListDeletedMediaRequest",
    "ListDeletedMediaResponse",
    "ListDeletedMediaUseCase",
    "ListMediaRequest",
    "ListMediaResponse",
    "ListMediaUseCase",
    "MediaFileItem",
    "MediaItem",
    "PurgeMediaRequest",
    "PurgeMediaResponse",
    "PurgeMediaUseCase",
    "RestoreMediaRequest",
    "RestoreMediaUseCase",
    "UpdateMediaRequest",
    "UpdateMediaUseCase",
    "UploadMediaRequest",
    "UploadMediaUseCase",
]
