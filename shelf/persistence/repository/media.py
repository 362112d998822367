"""PostgreSQL implementation of Media repository."""

from collections import defaultdict
from datetime import datetime
from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model.media import Media, MediaFile
from shelf.domain.repository.media import MediaRepository
from shelf.domain.value import MediaId, UserId
from shelf.persistence.mappers import (
    media_file_to_dict,
    media_to_dict,
    row_to_media,
    row_to_media_file,
)
from shelf.persistence.tables import (
    media_files_table,
    media_table,
    media_tags_table,
    tags_table,
)


class PostgresMediaRepository(MediaRepository):
    """PostgreSQL implementation of MediaRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_files(self, media_ids: list[UUID]) -> dict[UUID, list[MediaFile]]:
        """Fetch files for several media in a single query."""
        if not media_ids:
            return {}

        stmt = (
            select(media_files_table)
            .where(media_files_table.c.media_id.in_(media_ids))
            .order_by(media_files_table.c.created_at)
        )
        result = await self.session.execute(stmt)

        files: dict[UUID, list[MediaFile]] = defaultdict(list)
        for row in result.mappings().all():
            media_file = row_to_media_file(dict(row))
            files[media_file.media_id].append(media_file)
        return files

    async def _fetch_tags(self, media_ids: list[UUID]) -> dict[UUID, list[str]]:
        """Fetch tag names for several media in a single query."""
        if not media_ids:
            return {}

        stmt = (
            select(media_tags_table.c.media_id, tags_table.c.name)
            .select_from(media_tags_table)
            .join(tags_table, media_tags_table.c.tag_id == tags_table.c.id)
            .where(media_tags_table.c.media_id.in_(media_ids))
            .order_by(tags_table.c.name)
        )
        result = await self.session.execute(stmt)

        tags: dict[UUID, list[str]] = defaultdict(list)
        for row in result.fetchall():
            tags[row.media_id].append(row.name)
        return tags

    async def _hydrate(self, rows: Sequence[Any]) -> list[Media]:
        """Build media from rows, loading files and tags in two queries."""
        rows = [dict(row) for row in rows]
        media_ids = [row["id"] for row in rows]
        files = await self._fetch_files(media_ids)
        tags = await self._fetch_tags(media_ids)
        return [
            row_to_media(
                row, files=files.get(row["id"], []), tag_names=tags.get(row["id"], [])
            )
            for row in rows
        ]

    async def find_by_id(self, media_id: MediaId) -> Optional[Media]:
        """Find media by ID, active or soft-deleted."""
        stmt = select(media_table).where(media_table.c.id == media_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return (await self._hydrate([row]))[0]

    async def find_active(self, limit: int = 50, offset: int = 0) -> list[Media]:
        """Find active media, newest upload first."""
        stmt = (
            select(media_table)
            .where(media_table.c.deleted_at.is_(None))
            .order_by(media_table.c.uploaded_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._hydrate(result.mappings().all())

    async def find_active_by_ids(self, media_ids: list[MediaId]) -> list[Media]:
        """Find the active media among ``media_ids``, newest upload first."""
        if not media_ids:
            return []

        stmt = (
            select(media_table)
            .where(
                and_(
                    media_table.c.id.in_(media_ids),
                    media_table.c.deleted_at.is_(None),
                )
            )
            .order_by(media_table.c.uploaded_at.desc())
        )
        result = await self.session.execute(stmt)
        return await self._hydrate(result.mappings().all())

    async def find_deleted_by_owner(self, user_id: UserId) -> list[Media]:
        """Find a user's soft-deleted media, most recently deleted first."""
        stmt = (
            select(media_table)
            .where(
                and_(
                    media_table.c.uploaded_by == user_id,
                    media_table.c.deleted_at.is_not(None),
                )
            )
            .order_by(media_table.c.deleted_at.desc())
        )
        result = await self.session.execute(stmt)
        return await self._hydrate(result.mappings().all())

    async def save(self, media: Media) -> Media:
        """Save the media row (create or update). Files and tags are untouched."""
        media_dict = media_to_dict(media)

        existing = await self.session.execute(
            select(media_table.c.id).where(media_table.c.id == media.id)
        )

        if existing.first():
            # Lifecycle state only changes through soft_delete/restore
            media_dict.pop("deleted_at")
            stmt = (
                update(media_table)
                .where(media_table.c.id == media.id)
                .values(**media_dict)
            )
        else:
            stmt = insert(media_table).values(**media_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return media

    async def add_file(self, media_file: MediaFile) -> MediaFile:
        """Insert a file row.

        Raises:
            IntegrityError: On a second file of the same type (uq_media_file_type)
        """
        stmt = insert(media_files_table).values(**media_file_to_dict(media_file))
        await self.session.execute(stmt)
        await self.session.flush()
        return media_file

    async def soft_delete(self, media_id: MediaId, deleted_at: datetime) -> bool:
        """Set ``deleted_at`` where it is still NULL."""
        stmt = (
            update(media_table)
            .where(
                and_(
                    media_table.c.id == media_id,
                    media_table.c.deleted_at.is_(None),
                )
            )
            .values(deleted_at=deleted_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def restore(self, media_id: MediaId) -> bool:
        """Clear ``deleted_at`` where it is set."""
        stmt = (
            update(media_table)
            .where(
                and_(
                    media_table.c.id == media_id,
                    media_table.c.deleted_at.is_not(None),
                )
            )
            .values(deleted_at=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    def _purgeable(self, cutoff: datetime):
        return and_(
            media_table.c.deleted_at.is_not(None),
            media_table.c.deleted_at < cutoff,
        )

    async def find_purgeable(self, cutoff: datetime, limit: int) -> list[Media]:
        """Find media deleted before ``cutoff``, oldest deletion first."""
        stmt = (
            select(media_table)
            .where(self._purgeable(cutoff))
            .order_by(media_table.c.deleted_at)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return await self._hydrate(result.mappings().all())

    async def lock_purgeable(
        self, media_ids: list[MediaId], cutoff: datetime
    ) -> list[MediaId]:
        """SELECT ... FOR UPDATE the ids that still qualify."""
        if not media_ids:
            return []

        stmt = (
            select(media_table.c.id)
            .where(and_(media_table.c.id.in_(media_ids), self._purgeable(cutoff)))
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return [MediaId(row.id) for row in result.fetchall()]

    async def delete_files(self, media_ids: list[MediaId]) -> int:
        """Delete every file row of the given media."""
        if not media_ids:
            return 0
        stmt = delete(media_files_table).where(
            media_files_table.c.media_id.in_(media_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_purged(self, media_ids: list[MediaId], cutoff: datetime) -> int:
        """Delete media rows that still satisfy the purge predicate."""
        if not media_ids:
            return 0
        stmt = delete(media_table).where(
            and_(media_table.c.id.in_(media_ids), self._purgeable(cutoff))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
