"""List tags use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from shelf.domain.model import Tag
from shelf.domain.service import TagService


class TagItem(BaseModel):
    """Tag in the shared vocabulary."""

    id: str
    name: str
    created_at: datetime

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagItem":
        return cls(id=str(tag.id), name=tag.name.root, created_at=tag.created_at)


class ListTagsRequest(BaseModel):
    limit: int = Field(default=500, ge=1, le=500)


class ListTagsResponse(BaseModel):
    tags: list[TagItem]


class ListTagsUseCase:
    """List every tag by name, including tags no media uses any more."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        tags = await self.tag_service.get_all_tags(limit=request.limit)
        logfire.info("Tags listed", count=len(tags))
        return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])
