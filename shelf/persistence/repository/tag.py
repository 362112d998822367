"""PostgreSQL implementation of Tag repository."""

from typing import Optional
from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model.common import utcnow
from shelf.domain.model.tag import Tag
from shelf.domain.repository.tag import TagRepository
from shelf.domain.value import MediaId, TagId, TagName
from shelf.persistence.mappers import row_to_tag
from shelf.persistence.tables import media_tags_table, tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name."""
        stmt = select(tags_table).where(tags_table.c.name == name.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def get_or_create(self, name: TagName) -> Tag:
        """Return the tag named ``name``, inserting it on first use.

        ``ON CONFLICT DO NOTHING`` lets two uploads introduce the same tag
        concurrently.
        """
        stmt = (
            insert(tags_table)
            .values(id=TagId(uuid4()), name=name.root, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

        tag = await self.find_by_name(name)
        assert tag is not None
        return tag

    async def find_all(self, limit: int = 500) -> list[Tag]:
        """Find all tags ordered by name."""
        stmt = select(tags_table).order_by(tags_table.c.name).limit(limit)
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_tag(row._asdict()) for row in rows]

    async def replace_media_tags(self, media_id: MediaId, tag_ids: list[TagId]) -> None:
        """Replace every tag link of a media entry."""
        await self.session.execute(
            delete(media_tags_table).where(media_tags_table.c.media_id == media_id)
        )
        if tag_ids:
            stmt = (
                insert(media_tags_table)
                .values([{"media_id": media_id, "tag_id": tag_id} for tag_id in tag_ids])
                .on_conflict_do_nothing()
            )
            await self.session.execute(stmt)
        await self.session.flush()

    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Delete tag links of the given media."""
        if not media_ids:
            return 0
        stmt = delete(media_tags_table).where(media_tags_table.c.media_id.in_(media_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
