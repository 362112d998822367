"""Get collection use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import CollectionId, UserId

from .common import CollectionItem


class GetCollectionRequest(BaseModel):
    """Get collection request."""

    collection_id: str
    user_id: str


class GetCollectionUseCase:
    """Use case for reading one owned collection."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize get collection use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: GetCollectionRequest) -> CollectionItem:
        """Execute get collection flow.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
        """
        collection, media = await self.collection_service.get_collection(
            CollectionId(UUID(request.collection_id)), UserId(UUID(request.user_id))
        )
        return CollectionItem.from_collection(collection, media)
