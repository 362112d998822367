"""Response shapes shared by the collection use cases."""

from datetime import datetime

from pydantic import BaseModel

from shelf.application.usecase.media.common import MediaItem
from shelf.domain.model.collection import Collection
from shelf.domain.model.media import Media


class CollectionItem(BaseModel):
    """Collection with its active media."""

    id: str
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
    media: list[MediaItem]
    media_count: int

    @classmethod
    def from_collection(
        cls, collection: Collection, media: list[Media]
    ) -> "CollectionItem":
        """Build the response item; soft-deleted media is already filtered out."""
        return cls(
            id=str(collection.id),
            name=collection.name,
            description=collection.description,
            created_at=collection.created_at,
            updated_at=collection.updated_at,
            media=[MediaItem.from_media(m) for m in media],
            media_count=len(media),
        )
