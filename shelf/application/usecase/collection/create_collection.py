"""Create collection use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import UserId

from .common import CollectionItem


class CreateCollectionRequest(BaseModel):
    """Create collection request."""

    user_id: str
    name: str | None = None
    description: str | None = None


class CreateCollectionUseCase:
    """Use case for creating a collection."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize create collection use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: CreateCollectionRequest) -> CollectionItem:
        """Execute create collection flow.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the caller already has a collection with that name
        """
        collection = await self.collection_service.create_collection(
            UserId(UUID(request.user_id)), request.name, request.description
        )
        return CollectionItem.from_collection(collection, [])
