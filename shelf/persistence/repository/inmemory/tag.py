"""In-memory tag repository for testing."""

from typing import Optional
from uuid import uuid4

from shelf.domain.model.common import utcnow
from shelf.domain.model.tag import Tag
from shelf.domain.repository.tag import TagRepository
from shelf.domain.value import MediaId, TagId, TagName


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing.

    Also holds the media-tag links, which the in-memory media repository
    reads to fill in ``Media.tags``.
    """

    def __init__(self) -> None:
        self._tags: dict[TagId, Tag] = {}
        self._links: dict[MediaId, list[TagId]] = {}

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name."""
        for tag in self._tags.values():
            if tag.name == name:
                return tag
        return None

    async def get_or_create(self, name: TagName) -> Tag:
        """Return the tag named ``name``, creating it on first use."""
        existing = await self.find_by_name(name)
        if existing:
            return existing
        tag = Tag(id=TagId(uuid4()), name=name, created_at=utcnow())
        self._tags[tag.id] = tag
        return tag

    async def find_all(self, limit: int = 500) -> list[Tag]:
        """Find all tags ordered by name."""
        return sorted(self._tags.values(), key=lambda t: t.name.root)[:limit]

    async def replace_media_tags(self, media_id: MediaId, tag_ids: list[TagId]) -> None:
        """Replace every tag link of a media entry."""
        self._links[media_id] = list(dict.fromkeys(tag_ids))

    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Delete tag links of the given media."""
        removed = 0
        for media_id in media_ids:
            removed += len(self._links.pop(media_id, []))
        return removed

    def tag_names_for(self, media_id: MediaId) -> list[TagName]:
        """Names of the tags linked to a media entry, ordered by name."""
        names = [self._tags[tag_id].name for tag_id in self._links.get(media_id, [])]
        return sorted(names, key=lambda n: n.root)

    def link_count(self, media_id: MediaId) -> int:
        """Number of tag links a media entry has."""
        return len(self._links.get(media_id, []))
