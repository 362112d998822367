"""Delete collection use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import CollectionId, UserId


class DeleteCollectionRequest(BaseModel):
    """Delete collection request."""

    collection_id: str
    user_id: str


class DeleteCollectionUseCase:
    """Use case for deleting a collection. Member media is kept."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize delete collection use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: DeleteCollectionRequest) -> None:
        """Execute delete collection flow.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
        """
        await self.collection_service.delete_collection(
            CollectionId(UUID(request.collection_id)), UserId(UUID(request.user_id))
        )
