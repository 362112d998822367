"""Tag domain service."""

import logfire

from shelf.domain.model.tag import Tag
from shelf.domain.repository import TagRepository
from shelf.domain.value import MediaId, TagName

from .base import Service


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    async def set_media_tags(self, media_id: MediaId, tag_names: list[TagName]) -> list[Tag]:
        """Replace the tags of a media entry, creating unknown tags.

        Args:
            media_id: Media to tag
            tag_names: Full new set of tag names (may be empty)

        Returns:
            Tags now linked to the media
        """
        with logfire.span(
            "tag_service.set_media_tags",
            media_id=str(media_id),
            tags=[t.root for t in tag_names],
        ):
            tags = [await self.tag_repository.get_or_create(name) for name in tag_names]
            await self.tag_repository.replace_media_tags(
                media_id, [tag.id for tag in tags]
            )
            logfire.info("Media tags replaced", media_id=str(media_id), count=len(tags))
            return tags

    async def get_all_tags(self, limit: int = 500) -> list[Tag]:
        """Get all tags ordered by name.

        Args:
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        with logfire.span("tag_service.get_all_tags", limit=limit):
            tags = await self.tag_repository.find_all(limit=limit)
            logfire.info("Tags retrieved", count=len(tags))
            return tags
