"""Purge sweeper domain service.

Permanently removes media whose grace window has elapsed. Each page is
selected, its blobs deleted best-effort, then the rows that still qualify
are locked and removed along with their link rows. Media restored between
selection and locking drops out at the lock step and is never purged.

Every page commits on its own, so row locks never outlive their page and
a failure part-way through keeps the pages already purged.
"""

from datetime import datetime, timedelta

import logfire

from shelf.config import LibrarySettings
from shelf.domain.model.common import utcnow
from shelf.domain.repository import (
    CollectionRepository,
    MediaRepository,
    TagRepository,
    UnitOfWork,
)

from .base import Service
from .storage_service import StorageService


class PurgeService(Service):
    """Domain service for sweeping expired soft-deleted media."""

    def __init__(
        self,
        media_repository: MediaRepository,
        tag_repository: TagRepository,
        collection_repository: CollectionRepository,
        storage_service: StorageService,
        library_settings: LibrarySettings,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize purge service.

        Args:
            media_repository: Media repository
            tag_repository: Tag repository, for tag link cleanup
            collection_repository: Collection repository, for membership cleanup
            storage_service: Storage service, for blob deletion
            library_settings: Retention window and paging limits
            unit_of_work: Commits each page
        """
        self.media_repository = media_repository
        self.tag_repository = tag_repository
        self.collection_repository = collection_repository
        self.storage_service = storage_service
        self.library_settings = library_settings
        self.unit_of_work = unit_of_work

    def cutoff(self, now: datetime) -> datetime:
        """Media deleted strictly before this moment may be purged."""
        return now - timedelta(days=self.library_settings.retention_days)

    async def sweep(self, now: datetime | None = None) -> int:
        """Purge every media past its grace window, page by page.

        Safe to repeat: a second sweep at the same time purges nothing.

        Args:
            now: Sweep time

        Returns:
            Number of media rows removed
        """
        now = now or utcnow()
        cutoff = self.cutoff(now)
        with logfire.span("purge_service.sweep", cutoff=cutoff.isoformat()):
            purged = 0
            for _ in range(self.library_settings.purge_max_batches):
                removed = await self._purge_page(cutoff)
                if removed is None:
                    break
                await self.unit_of_work.commit()
                purged += removed
            else:
                logfire.warn(
                    "Sweep stopped at batch limit",
                    batches=self.library_settings.purge_max_batches,
                )

            logfire.info("Sweep finished", purged_count=purged)
            return purged

    async def _purge_page(self, cutoff: datetime) -> int | None:
        """Purge one page of candidates.

        Returns:
            Rows removed, or None when nothing qualified
        """
        candidates = await self.media_repository.find_purgeable(
            cutoff, self.library_settings.purge_batch_size
        )
        if not candidates:
            return None

        with logfire.span("purge_service.purge_page", candidates=len(candidates)):
            for media in candidates:
                await self.storage_service.delete_artifacts(media.artifact_urls())

            locked = await self.media_repository.lock_purgeable(
                [m.id for m in candidates], cutoff
            )
            if len(locked) < len(candidates):
                logfire.info(
                    "Candidates restored before purge",
                    skipped=len(candidates) - len(locked),
                )
            if not locked:
                return 0

            tag_links = await self.tag_repository.unlink_media(locked)
            memberships = await self.collection_repository.unlink_media(locked)
            files = await self.media_repository.delete_files(locked)
            removed = await self.media_repository.delete_purged(locked, cutoff)

            logfire.info(
                "Media purged",
                media=removed,
                files=files,
                tag_links=tag_links,
                memberships=memberships,
            )
            return removed
