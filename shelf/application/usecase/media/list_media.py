"""List media use case."""

import logfire
from pydantic import BaseModel, Field

from shelf.domain.service import LifecycleService

from .common import MediaItem


class ListMediaRequest(BaseModel):
    """List media request."""

    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListMediaResponse(BaseModel):
    """List media response."""

    media: list[MediaItem]


class ListMediaUseCase:
    """Use case for browsing the active library."""

    def __init__(self, lifecycle_service: LifecycleService) -> None:
        """Initialize list media use case.

        Args:
            lifecycle_service: Lifecycle domain service
        """
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: ListMediaRequest) -> ListMediaResponse:
        """Execute list media flow.

        Args:
            request: Pagination parameters

        Returns:
            Active media, newest upload first
        """
        with logfire.span("list_media.execute", limit=request.limit, offset=request.offset):
            media = await self.lifecycle_service.list_active(request.limit, request.offset)
            return ListMediaResponse(media=[MediaItem.from_media(m) for m in media])
