"""Tag entity for categorizing media."""

from datetime import datetime

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import TagId, TagName


class Tag(DomainModel):
    """Tag shared across the whole library.

    Created on first use and never deleted, even when no media uses it.
    """

    id: TagId
    name: TagName
    created_at: datetime = Field(default_factory=utcnow)
