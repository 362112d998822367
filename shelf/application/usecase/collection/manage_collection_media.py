"""Collection membership use cases."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import CollectionId, MediaId, UserId

from .common import CollectionItem


class CollectionMediaRequest(BaseModel):
    """Add or remove one media entry."""

    collection_id: str
    user_id: str
    media_id: str


class AddCollectionMediaUseCase:
    """Use case for adding media to a collection."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize add collection media use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: CollectionMediaRequest) -> CollectionItem:
        """Add active media; adding it twice is a no-op.

        Raises:
            NotFoundError: If the collection or media is missing, or the
                media is deleted
            ForbiddenError: If the caller does not own the collection
        """
        collection_id = CollectionId(UUID(request.collection_id))
        user_id = UserId(UUID(request.user_id))
        await self.collection_service.add_media(
            collection_id, user_id, MediaId(UUID(request.media_id))
        )
        collection, media = await self.collection_service.get_collection(
            collection_id, user_id
        )
        return CollectionItem.from_collection(collection, media)


class RemoveCollectionMediaUseCase:
    """Use case for removing media from a collection."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize remove collection media use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: CollectionMediaRequest) -> None:
        """Remove media from the collection.

        Raises:
            NotFoundError: If the collection does not exist or the media is
                not in it
            ForbiddenError: If the caller does not own the collection
        """
        await self.collection_service.remove_media(
            CollectionId(UUID(request.collection_id)),
            UserId(UUID(request.user_id)),
            MediaId(UUID(request.media_id)),
        )
