"""List deleted media use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import LifecycleService
from shelf.domain.value import UserId

from .common import MediaItem


class ListDeletedMediaRequest(BaseModel):
    """List deleted media request."""

    user_id: str


class DeletedMediaItem(MediaItem):
    """Trashed media with the whole days left before purge."""

    days_remaining: int


class ListDeletedMediaResponse(BaseModel):
    """List deleted media response."""

    media: list[DeletedMediaItem]


class ListDeletedMediaUseCase:
    """Use case for the caller's trash view."""

    def __init__(self, lifecycle_service: LifecycleService) -> None:
        """Initialize list deleted media use case.

        Args:
            lifecycle_service: Lifecycle domain service
        """
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: ListDeletedMediaRequest) -> ListDeletedMediaResponse:
        """Execute trash listing, most recently deleted first."""
        entries = await self.lifecycle_service.list_deleted(UserId(UUID(request.user_id)))
        return ListDeletedMediaResponse(
            media=[
                DeletedMediaItem(
                    **MediaItem.from_media(media).model_dump(),
                    days_remaining=days_remaining,
                )
                for media, days_remaining in entries
            ]
        )
