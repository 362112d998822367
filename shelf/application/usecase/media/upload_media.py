"""Upload media use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from shelf.application.usecase.base import BaseUseCase
from shelf.domain.service import MediaService
from shelf.domain.value import MediaMetadata, UserId

from .common import MediaItem


class UploadMediaRequest(BaseModel):
    """Register a blob that the client already uploaded to storage."""

    user_id: str
    blob_url: str
    content_type: str | None = None
    metadata: MediaMetadata


class UploadMediaUseCase(BaseUseCase[UploadMediaRequest, MediaItem]):
    """Use case for creating media from an uploaded file."""

    def __init__(self, media_service: MediaService) -> None:
        """Initialize upload media use case.

        Args:
            media_service: Media domain service
        """
        self.media_service = media_service

    async def execute(self, request: UploadMediaRequest) -> MediaItem:
        """Execute upload flow.

        Creates new media, or attaches the file to ``metadata.media_id``.

        Raises:
            ValidationError: If new media has no title
            NotFoundError: If the target media is missing or deleted
            ForbiddenError: If the caller does not own the target media
            ConflictError: If the target already has a file of this type
        """
        with logfire.span(
            "upload_media.execute",
            user_id=request.user_id,
            content_type=request.content_type,
            attach=request.metadata.media_id is not None,
        ):
            media = await self.media_service.upload(
                request.metadata,
                request.blob_url,
                request.content_type,
                UserId(UUID(request.user_id)),
            )
            return MediaItem.from_media(media)
