"""Delete media use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from shelf.config import LibrarySettings
from shelf.domain.service import LifecycleService
from shelf.domain.value import MediaId, UserId


class DeleteMediaRequest(BaseModel):
    """Delete media request."""

    media_id: str
    user_id: str


class DeleteMediaResponse(BaseModel):
    """Delete media response."""

    media_id: str
    deleted_at: datetime
    purge_after: datetime


class DeleteMediaUseCase:
    """Use case for moving media to the trash."""

    def __init__(
        self, lifecycle_service: LifecycleService, library_settings: LibrarySettings
    ) -> None:
        """Initialize delete media use case.

        Args:
            lifecycle_service: Lifecycle domain service
            library_settings: Retention window
        """
        self.lifecycle_service = lifecycle_service
        self.library_settings = library_settings

    async def execute(self, request: DeleteMediaRequest) -> DeleteMediaResponse:
        """Execute soft delete.

        Raises:
            NotFoundError: If missing or already deleted
            ForbiddenError: If the caller is not the uploader
        """
        media = await self.lifecycle_service.soft_delete(
            MediaId(UUID(request.media_id)), UserId(UUID(request.user_id))
        )
        return DeleteMediaResponse(
            media_id=str(media.id),
            deleted_at=media.deleted_at,
            purge_after=media.purge_after(self.library_settings.retention_days),
        )
