"""In-memory collection repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from shelf.domain.model.collection import Collection
from shelf.domain.repository.collection import CollectionRepository
from shelf.domain.value import CollectionId, MediaId, UserId


class InMemoryCollectionRepository(CollectionRepository):
    """In-memory implementation of CollectionRepository for testing."""

    def __init__(self) -> None:
        self._collections: dict[CollectionId, Collection] = {}
        # (collection_id, media_id) in insertion order
        self._links: list[tuple[CollectionId, MediaId]] = []

    async def find_by_id(self, collection_id: CollectionId) -> Optional[Collection]:
        """Find a collection by ID."""
        return self._collections.get(collection_id)

    async def find_by_owner(self, user_id: UserId) -> list[Collection]:
        """Find a user's collections ordered by name."""
        owned = [c for c in self._collections.values() if c.user_id == user_id]
        return sorted(owned, key=lambda c: c.name)

    async def find_by_owner_and_name(
        self, user_id: UserId, name: str
    ) -> Optional[Collection]:
        """Find a user's collection by exact name."""
        for collection in self._collections.values():
            if collection.user_id == user_id and collection.name == name:
                return collection
        return None

    async def save(self, collection: Collection) -> Collection:
        """Save a collection.

        Raises:
            IntegrityError: If the owner already has a collection with that name
        """
        existing = await self.find_by_owner_and_name(collection.user_id, collection.name)
        if existing and existing.id != collection.id:
            raise IntegrityError("Duplicate collection name", None, Exception())
        self._collections[collection.id] = collection
        return collection

    async def delete(self, collection_id: CollectionId) -> None:
        """Delete membership rows, then the collection."""
        self._links = [link for link in self._links if link[0] != collection_id]
        self._collections.pop(collection_id, None)

    async def find_media_ids(self, collection_id: CollectionId) -> list[MediaId]:
        """List media linked to a collection, most recently added first."""
        return [m for c, m in reversed(self._links) if c == collection_id]

    async def add_media(self, collection_id: CollectionId, media_id: MediaId) -> None:
        """Link media to a collection, ignoring an existing link."""
        if (collection_id, media_id) not in self._links:
            self._links.append((collection_id, media_id))

    async def remove_media(self, collection_id: CollectionId, media_id: MediaId) -> bool:
        """Unlink media from a collection."""
        if (collection_id, media_id) in self._links:
            self._links.remove((collection_id, media_id))
            return True
        return False

    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Remove the given media from every collection."""
        doomed = set(media_ids)
        before = len(self._links)
        self._links = [link for link in self._links if link[1] not in doomed]
        return before - len(self._links)
