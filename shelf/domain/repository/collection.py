"""Collection repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from shelf.domain.model.collection import Collection
from shelf.domain.value import CollectionId, MediaId, UserId


class CollectionRepository(ABC):
    """Repository for collections and the collection-media link rows."""

    @abstractmethod
    async def find_by_id(self, collection_id: CollectionId) -> Optional[Collection]:
        """Find a collection by ID.

        Args:
            collection_id: The collection's unique identifier

        Returns:
            The collection if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner(self, user_id: UserId) -> list[Collection]:
        """Find a user's collections ordered by name.

        Args:
            user_id: Owner's user ID

        Returns:
            List of collections
        """
        pass

    @abstractmethod
    async def find_by_owner_and_name(
        self, user_id: UserId, name: str
    ) -> Optional[Collection]:
        """Find a user's collection by exact name.

        Args:
            user_id: Owner's user ID
            name: Collection name

        Returns:
            The collection if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, collection: Collection) -> Collection:
        """Save a collection (create or update).

        Args:
            collection: The collection to save

        Returns:
            The saved collection

        Raises:
            IntegrityError: If the owner already has a collection with that name
        """
        pass

    @abstractmethod
    async def delete(self, collection_id: CollectionId) -> None:
        """Delete a collection and its membership rows.

        Args:
            collection_id: Collection to delete
        """
        pass

    @abstractmethod
    async def find_media_ids(self, collection_id: CollectionId) -> list[MediaId]:
        """List media linked to a collection, active or not.

        Args:
            collection_id: Collection to inspect

        Returns:
            Linked media IDs
        """
        pass

    @abstractmethod
    async def add_media(self, collection_id: CollectionId, media_id: MediaId) -> None:
        """Link media to a collection. No-op if already linked.

        Args:
            collection_id: Target collection
            media_id: Media to add
        """
        pass

    @abstractmethod
    async def remove_media(self, collection_id: CollectionId, media_id: MediaId) -> bool:
        """Unlink media from a collection.

        Args:
            collection_id: Target collection
            media_id: Media to remove

        Returns:
            True if a link was removed
        """
        pass

    @abstractmethod
    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Remove the given media from every collection.

        Args:
            media_ids: Media being purged

        Returns:
            Number of link rows removed
        """
        pass
