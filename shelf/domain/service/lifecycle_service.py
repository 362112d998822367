"""Media lifecycle domain service.

Media moves Active -> SoftDeleted -> Purged. Only the uploader may delete or
restore. Both transitions are conditional writes in the repository, so two
racing requests produce exactly one winner.
"""

from datetime import datetime

import logfire

from shelf.domain.error import (
    ForbiddenError,
    InvalidStateError,
    MediaDeletedError,
    NotFoundError,
)
from shelf.domain.model.common import utcnow
from shelf.domain.model.media import Media
from shelf.domain.repository import MediaRepository
from shelf.domain.value import MediaId, UserId

from .base import Service


class LifecycleService(Service):
    """Domain service for soft delete, restore and the trash view."""

    def __init__(self, media_repository: MediaRepository, retention_days: int = 7) -> None:
        """Initialize lifecycle service.

        Args:
            media_repository: Media repository
            retention_days: Grace window between soft delete and purge
        """
        self.media_repository = media_repository
        self.retention_days = retention_days

    async def soft_delete(
        self, media_id: MediaId, requester: UserId, now: datetime | None = None
    ) -> Media:
        """Move media to the trash.

        Files, tags and collection memberships are left in place until purge.

        Args:
            media_id: Media to delete
            requester: Caller
            now: Deletion time

        Returns:
            The soft-deleted media

        Raises:
            NotFoundError: If the media does not exist
            ForbiddenError: If the caller is not the uploader
            MediaDeletedError: If the media is already deleted
        """
        now = now or utcnow()
        with logfire.span(
            "lifecycle_service.soft_delete",
            media_id=str(media_id),
            user_id=str(requester),
        ):
            media = await self._get_owned(media_id, requester)
            if media.is_deleted:
                logfire.warn("Media already deleted", media_id=str(media_id))
                raise MediaDeletedError(str(media_id))

            if not await self.media_repository.soft_delete(media_id, now):
                logfire.warn("Soft delete lost race", media_id=str(media_id))
                raise MediaDeletedError(str(media_id))

            logfire.info("Media soft-deleted", media_id=str(media_id))
            return media.model_copy(update={"deleted_at": now})

    async def restore(self, media_id: MediaId, requester: UserId) -> Media:
        """Bring media back from the trash.

        Args:
            media_id: Media to restore
            requester: Caller

        Returns:
            The restored media

        Raises:
            NotFoundError: If the media does not exist or was purged meanwhile
            ForbiddenError: If the caller is not the uploader
            InvalidStateError: If the media is not deleted
        """
        with logfire.span(
            "lifecycle_service.restore",
            media_id=str(media_id),
            user_id=str(requester),
        ):
            media = await self._get_owned(media_id, requester)
            if not media.is_deleted:
                raise InvalidStateError("Media is not deleted")

            if not await self.media_repository.restore(media_id):
                logfire.warn("Restore lost race", media_id=str(media_id))
                if not await self.media_repository.find_by_id(media_id):
                    raise NotFoundError("Media", str(media_id))
                raise InvalidStateError("Media is not deleted")

            logfire.info("Media restored", media_id=str(media_id))
            return media.model_copy(update={"deleted_at": None})

    async def list_active(self, limit: int = 50, offset: int = 0) -> list[Media]:
        """List active media across the library, newest upload first.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of active media
        """
        with logfire.span("lifecycle_service.list_active", limit=limit, offset=offset):
            media = await self.media_repository.find_active(limit, offset)
            logfire.info("Active media listed", count=len(media))
            return media

    async def list_deleted(
        self, requester: UserId, now: datetime | None = None
    ) -> list[tuple[Media, int]]:
        """List the caller's trash, most recently deleted first.

        Args:
            requester: Caller
            now: Current time

        Returns:
            Pairs of media and whole days left before purge
        """
        now = now or utcnow()
        with logfire.span("lifecycle_service.list_deleted", user_id=str(requester)):
            media = await self.media_repository.find_deleted_by_owner(requester)
            logfire.info("Deleted media listed", count=len(media))
            return [(m, m.days_remaining(now, self.retention_days) or 0) for m in media]

    async def _get_owned(self, media_id: MediaId, requester: UserId) -> Media:
        media = await self.media_repository.find_by_id(media_id)
        if not media:
            logfire.warn("Media not found", media_id=str(media_id))
            raise NotFoundError("Media", str(media_id))
        if not media.is_owned_by(requester):
            logfire.warn(
                "Lifecycle change on foreign media",
                media_id=str(media_id),
                user_id=str(requester),
            )
            raise ForbiddenError("Media", str(media_id), str(requester))
        return media
