"""PostgreSQL implementation of Collection repository."""

from typing import Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model.collection import Collection
from shelf.domain.repository.collection import CollectionRepository
from shelf.domain.value import CollectionId, MediaId, UserId
from shelf.persistence.mappers import collection_to_dict, row_to_collection
from shelf.persistence.tables import collection_media_table, collections_table


class PostgresCollectionRepository(CollectionRepository):
    """PostgreSQL implementation of CollectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, collection_id: CollectionId) -> Optional[Collection]:
        """Find a collection by ID."""
        stmt = select(collections_table).where(collections_table.c.id == collection_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_collection(dict(row)) if row else None

    async def find_by_owner(self, user_id: UserId) -> list[Collection]:
        """Find a user's collections ordered by name."""
        stmt = (
            select(collections_table)
            .where(collections_table.c.user_id == user_id)
            .order_by(collections_table.c.name)
        )
        result = await self.session.execute(stmt)
        return [row_to_collection(dict(row)) for row in result.mappings().all()]

    async def find_by_owner_and_name(
        self, user_id: UserId, name: str
    ) -> Optional[Collection]:
        """Find a user's collection by exact name."""
        stmt = select(collections_table).where(
            and_(
                collections_table.c.user_id == user_id,
                collections_table.c.name == name,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_collection(dict(row)) if row else None

    async def save(self, collection: Collection) -> Collection:
        """Save a collection (create or update).

        Raises:
            IntegrityError: If the owner already has a collection with that name
        """
        collection_dict = collection_to_dict(collection)

        existing = await self.find_by_id(collection.id)

        if existing:
            stmt = (
                update(collections_table)
                .where(collections_table.c.id == collection.id)
                .values(**collection_dict)
            )
        else:
            stmt = collections_table.insert().values(**collection_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return collection

    async def delete(self, collection_id: CollectionId) -> None:
        """Delete membership rows, then the collection."""
        await self.session.execute(
            delete(collection_media_table).where(
                collection_media_table.c.collection_id == collection_id
            )
        )
        await self.session.execute(
            delete(collections_table).where(collections_table.c.id == collection_id)
        )
        await self.session.flush()

    async def find_media_ids(self, collection_id: CollectionId) -> list[MediaId]:
        """List media linked to a collection, most recently added first."""
        stmt = (
            select(collection_media_table.c.media_id)
            .where(collection_media_table.c.collection_id == collection_id)
            .order_by(collection_media_table.c.added_at.desc())
        )
        result = await self.session.execute(stmt)
        return [MediaId(row.media_id) for row in result.fetchall()]

    async def add_media(self, collection_id: CollectionId, media_id: MediaId) -> None:
        """Link media to a collection, ignoring an existing link."""
        stmt = (
            insert(collection_media_table)
            .values(collection_id=collection_id, media_id=media_id)
            .on_conflict_do_nothing()
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def remove_media(self, collection_id: CollectionId, media_id: MediaId) -> bool:
        """Unlink media from a collection."""
        stmt = delete(collection_media_table).where(
            and_(
                collection_media_table.c.collection_id == collection_id,
                collection_media_table.c.media_id == media_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Remove the given media from every collection."""
        if not media_ids:
            return 0
        stmt = delete(collection_media_table).where(
            collection_media_table.c.media_id.in_(media_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
