"""Update collection use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import CollectionId, UserId

from .common import CollectionItem


class UpdateCollectionRequest(BaseModel):
    """Update collection request. ``None`` leaves a field unchanged."""

    collection_id: str
    user_id: str
    name: str | None = None
    description: str | None = None


class UpdateCollectionUseCase:
    """Use case for renaming or re-describing a collection."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize update collection use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: UpdateCollectionRequest) -> CollectionItem:
        """Execute update collection flow.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
            ValidationError: If the new name is blank
            ConflictError: If the new name is already taken
        """
        collection_id = CollectionId(UUID(request.collection_id))
        user_id = UserId(UUID(request.user_id))
        await self.collection_service.update_collection(
            collection_id, user_id, request.name, request.description
        )
        collection, media = await self.collection_service.get_collection(
            collection_id, user_id
        )
        return CollectionItem.from_collection(collection, media)
