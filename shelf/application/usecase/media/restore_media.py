"""Restore media use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import LifecycleService
from shelf.domain.value import MediaId, UserId

from .common import MediaItem


class RestoreMediaRequest(BaseModel):
    """Restore media request."""

    media_id: str
    user_id: str


class RestoreMediaUseCase:
    """Use case for bringing media back from the trash."""

    def __init__(self, lifecycle_service: LifecycleService) -> None:
        """Initialize restore media use case.

        Args:
            lifecycle_service: Lifecycle domain service
        """
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: RestoreMediaRequest) -> MediaItem:
        """Execute restore.

        Raises:
            NotFoundError: If media not found
            ForbiddenError: If the caller is not the uploader
            InvalidStateError: If the media is not deleted
        """
        media = await self.lifecycle_service.restore(
            MediaId(UUID(request.media_id)), UserId(UUID(request.user_id))
        )
        return MediaItem.from_media(media)
