"""In-memory media repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from shelf.domain.model.media import Media, MediaFile
from shelf.domain.repository.media import MediaRepository
from shelf.domain.value import MediaId, UserId

from .tag import InMemoryTagRepository


class InMemoryMediaRepository(MediaRepository):
    """In-memory implementation of MediaRepository for testing.

    Media rows and file rows are stored apart, as in the database, and
    assembled on read. Tag names come from the shared tag repository.
    """

    def __init__(self, tag_repository: InMemoryTagRepository | None = None) -> None:
        self._media: dict[MediaId, Media] = {}
        self._files: list[MediaFile] = []
        self._tag_repository = tag_repository

    def _assemble(self, media: Media) -> Media:
        files = sorted(
            (f for f in self._files if f.media_id == media.id),
            key=lambda f: f.created_at,
        )
        tags = (
            self._tag_repository.tag_names_for(media.id)
            if self._tag_repository
            else []
        )
        return media.model_copy(update={"files": files, "tags": tags})

    async def find_by_id(self, media_id: MediaId) -> Optional[Media]:
        """Find media by ID, active or soft-deleted."""
        media = self._media.get(media_id)
        return self._assemble(media) if media else None

    async def find_active(self, limit: int = 50, offset: int = 0) -> list[Media]:
        """Find active media, newest upload first."""
        active = [m for m in self._media.values() if m.deleted_at is None]
        active.sort(key=lambda m: m.uploaded_at, reverse=True)
        return [self._assemble(m) for m in active[offset : offset + limit]]

    async def find_active_by_ids(self, media_ids: list[MediaId]) -> list[Media]:
        """Find the active media among ``media_ids``, newest upload first."""
        wanted = set(media_ids)
        active = [
            m for m in self._media.values() if m.id in wanted and m.deleted_at is None
        ]
        active.sort(key=lambda m: m.uploaded_at, reverse=True)
        return [self._assemble(m) for m in active]

    async def find_deleted_by_owner(self, user_id: UserId) -> list[Media]:
        """Find a user's soft-deleted media, most recently deleted first."""
        deleted = [
            m
            for m in self._media.values()
            if m.uploaded_by == user_id and m.deleted_at is not None
        ]
        deleted.sort(key=lambda m: m.deleted_at, reverse=True)
        return [self._assemble(m) for m in deleted]

    async def save(self, media: Media) -> Media:
        """Save the media row. Files and tags are stored separately."""
        row = media.model_copy(update={"files": [], "tags": []})
        existing = self._media.get(media.id)
        if existing:
            row = row.model_copy(update={"deleted_at": existing.deleted_at})
        self._media[media.id] = row
        return media

    async def add_file(self, media_file: MediaFile) -> MediaFile:
        """Insert a file row.

        Raises:
            IntegrityError: On a second file of the same type
        """
        for existing in self._files:
            if (
                existing.media_id == media_file.media_id
                and existing.file_type == media_file.file_type
            ):
                raise IntegrityError("Duplicate media file type", None, Exception())
        self._files.append(media_file)
        return media_file

    async def soft_delete(self, media_id: MediaId, deleted_at: datetime) -> bool:
        """Set ``deleted_at`` if the media is active."""
        media = self._media.get(media_id)
        if not media or media.deleted_at is not None:
            return False
        self._media[media_id] = media.model_copy(update={"deleted_at": deleted_at})
        return True

    async def restore(self, media_id: MediaId) -> bool:
        """Clear ``deleted_at`` if the media is deleted."""
        media = self._media.get(media_id)
        if not media or media.deleted_at is None:
            return False
        self._media[media_id] = media.model_copy(update={"deleted_at": None})
        return True

    def _is_purgeable(self, media: Media, cutoff: datetime) -> bool:
        return media.deleted_at is not None and media.deleted_at < cutoff

    async def find_purgeable(self, cutoff: datetime, limit: int) -> list[Media]:
        """Find media deleted before ``cutoff``, oldest deletion first."""
        candidates = [m for m in self._media.values() if self._is_purgeable(m, cutoff)]
        candidates.sort(key=lambda m: m.deleted_at)
        return [self._assemble(m) for m in candidates[:limit]]

    async def lock_purgeable(
        self, media_ids: list[MediaId], cutoff: datetime
    ) -> list[MediaId]:
        """Return the ids that still qualify."""
        return [
            media_id
            for media_id in media_ids
            if media_id in self._media
            and self._is_purgeable(self._media[media_id], cutoff)
        ]

    async def delete_files(self, media_ids: list[MediaId]) -> int:
        """Delete every file row of the given media."""
        doomed = set(media_ids)
        before = len(self._files)
        self._files = [f for f in self._files if f.media_id not in doomed]
        return before - len(self._files)

    async def delete_purged(self, media_ids: list[MediaId], cutoff: datetime) -> int:
        """Delete media rows that still satisfy the purge predicate."""
        removed = 0
        for media_id in media_ids:
            media = self._media.get(media_id)
            if media and self._is_purgeable(media, cutoff):
                del self._media[media_id]
                removed += 1
        return removed

    def file_count(self, media_id: MediaId) -> int:
        """Number of file rows stored for a media entry."""
        return sum(1 for f in self._files if f.media_id == media_id)
