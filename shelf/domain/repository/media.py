"""Media repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from shelf.domain.model.media import Media, MediaFile
from shelf.domain.value import MediaId, UserId


class MediaRepository(ABC):
    """Repository for Media aggregate and its files.

    Returned media always carries its files and tag names. Lifecycle writes
    (``soft_delete``, ``restore``, ``delete_purged``) are conditional on
    ``deleted_at`` so racing writers produce one winner.
    """

    @abstractmethod
    async def find_by_id(self, media_id: MediaId) -> Optional[Media]:
        """Find media by ID, active or soft-deleted.

        Args:
            media_id: The media's unique identifier

        Returns:
            The media if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(self, limit: int = 50, offset: int = 0) -> list[Media]:
        """Find active media across the library, newest upload first.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of active media
        """
        pass

    @abstractmethod
    async def find_active_by_ids(self, media_ids: list[MediaId]) -> list[Media]:
        """Find the active subset of the given media.

        Args:
            media_ids: Candidate media IDs

        Returns:
            Active media, newest upload first
        """
        pass

    @abstractmethod
    async def find_deleted_by_owner(self, user_id: UserId) -> list[Media]:
        """Find a user's soft-deleted media, most recently deleted first.

        Args:
            user_id: Owner's user ID

        Returns:
            List of soft-deleted media
        """
        pass

    @abstractmethod
    async def save(self, media: Media) -> Media:
        """Save the media row (create or update).

        Files and tags are written through ``add_file`` and the tag
        repository.

        Args:
            media: The media to save

        Returns:
            The saved media
        """
        pass

    @abstractmethod
    async def add_file(self, media_file: MediaFile) -> MediaFile:
        """Attach a file to media.

        Args:
            media_file: File to attach

        Returns:
            The saved file

        Raises:
            IntegrityError: If the media already has a file of that type
        """
        pass

    @abstractmethod
    async def soft_delete(self, media_id: MediaId, deleted_at: datetime) -> bool:
        """Mark media as deleted if it is currently active.

        Args:
            media_id: Media to delete
            deleted_at: Deletion time

        Returns:
            True if this call deleted it, False if missing or already deleted
        """
        pass

    @abstractmethod
    async def restore(self, media_id: MediaId) -> bool:
        """Clear ``deleted_at`` if the media is currently deleted.

        Args:
            media_id: Media to restore

        Returns:
            True if this call restored it, False if missing or active
        """
        pass

    @abstractmethod
    async def find_purgeable(self, cutoff: datetime, limit: int) -> list[Media]:
        """Find media deleted before ``cutoff``, oldest deletion first.

        Args:
            cutoff: Media deleted strictly before this moment qualifies
            limit: Page size

        Returns:
            Up to ``limit`` purgeable media
        """
        pass

    @abstractmethod
    async def lock_purgeable(
        self, media_ids: list[MediaId], cutoff: datetime
    ) -> list[MediaId]:
        """Lock the given media that still qualify for purge.

        Media restored since selection drops out here.

        Args:
            media_ids: Media selected for purge
            cutoff: Same cutoff used for selection

        Returns:
            IDs that still qualify, locked until the transaction ends
        """
        pass

    @abstractmethod
    async def delete_files(self, media_ids: list[MediaId]) -> int:
        """Delete every file row of the given media.

        Args:
            media_ids: Media being purged

        Returns:
            Number of file rows removed
        """
        pass

    @abstractmethod
    async def delete_purged(self, media_ids: list[MediaId], cutoff: datetime) -> int:
        """Delete media rows that still qualify for purge.

        Args:
            media_ids: Media being purged
            cutoff: Same cutoff used for selection

        Returns:
            Number of media rows removed
        """
        pass
