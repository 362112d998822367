"""Update media use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import MediaService
from shelf.domain.value import MediaChanges, MediaId, UserId

from .common import MediaItem


class UpdateMediaRequest(BaseModel):
    """Update media request."""

    media_id: str
    user_id: str
    changes: MediaChanges


class UpdateMediaUseCase:
    """Use case for editing media metadata."""

    def __init__(self, media_service: MediaService) -> None:
        """Initialize update media use case.

        Args:
            media_service: Media domain service
        """
        self.media_service = media_service

    async def execute(self, request: UpdateMediaRequest) -> MediaItem:
        """Execute update flow.

        Raises:
            NotFoundError: If media not found
            ForbiddenError: If the caller is not the uploader
            InvalidStateError: If the media is in the trash
        """
        media = await self.media_service.update_media(
            MediaId(UUID(request.media_id)),
            UserId(UUID(request.user_id)),
            request.changes,
        )
        return MediaItem.from_media(media)
