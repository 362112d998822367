"""Get media use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import MediaService
from shelf.domain.value import MediaId, UserId

from .common import MediaItem


class GetMediaRequest(BaseModel):
    """Get media request."""

    media_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetMediaUseCase:
    """Use case for retrieving one media entry."""

    def __init__(self, media_service: MediaService) -> None:
        """Initialize get media use case.

        Args:
            media_service: Media domain service
        """
        self.media_service = media_service

    async def execute(self, request: GetMediaRequest) -> MediaItem:
        """Execute get media flow.

        Raises:
            NotFoundError: If the media is missing, or deleted and the caller
                is not its uploader
        """
        media = await self.media_service.get_media(
            MediaId(UUID(request.media_id)),
            UserId(UUID(request.user_id)) if request.user_id else None,
        )
        return MediaItem.from_media(media)
