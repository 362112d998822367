"""Collection entity.

Collections are named, per-user shelves of media. Names are unique per
owner. Soft-deleted media stays linked but is filtered out of views.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import CollectionId, UserId


class Collection(DomainModel):
    """User-owned collection of media."""

    id: CollectionId
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_owned_by(self, user_id: UserId) -> bool:
        """Whether ``user_id`` owns this collection."""
        return self.user_id == user_id
