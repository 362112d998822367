"""List collections use case."""

from uuid import UUID

from pydantic import BaseModel

from shelf.domain.service import CollectionService
from shelf.domain.value import UserId

from .common import CollectionItem


class ListCollectionsRequest(BaseModel):
    """List collections request."""

    user_id: str


class ListCollectionsResponse(BaseModel):
    """List collections response."""

    collections: list[CollectionItem]


class ListCollectionsUseCase:
    """Use case for listing the caller's collections."""

    def __init__(self, collection_service: CollectionService) -> None:
        """Initialize list collections use case.

        Args:
            collection_service: Collection domain service
        """
        self.collection_service = collection_service

    async def execute(self, request: ListCollectionsRequest) -> ListCollectionsResponse:
        """Execute list collections flow, ordered by name."""
        entries = await self.collection_service.list_collections(
            UserId(UUID(request.user_id))
        )
        return ListCollectionsResponse(
            collections=[
                CollectionItem.from_collection(collection, media)
                for collection, media in entries
            ]
        )
