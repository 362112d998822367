"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from shelf.domain.model.tag import Tag
from shelf.domain.value import MediaId, TagId, TagName


class TagRepository(ABC):
    """Repository for tags and the media-tag link rows."""

    @abstractmethod
    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find a tag by name.

        Args:
            name: Tag name

        Returns:
            The tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_or_create(self, name: TagName) -> Tag:
        """Return the tag with this name, creating it on first use.

        Safe under concurrent creation of the same name.

        Args:
            name: Tag name

        Returns:
            The existing or newly created tag
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 500) -> list[Tag]:
        """Find all tags ordered by name.

        Args:
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def replace_media_tags(self, media_id: MediaId, tag_ids: list[TagId]) -> None:
        """Replace every tag link of a media entry.

        Args:
            media_id: Media whose links are replaced
            tag_ids: New set of tags
        """
        pass

    @abstractmethod
    async def unlink_media(self, media_ids: list[MediaId]) -> int:
        """Remove all tag links of the given media.

        Args:
            media_ids: Media being purged

        Returns:
            Number of link rows removed
        """
        pass
