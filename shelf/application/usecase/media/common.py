"""Response shapes shared by the media use cases."""

from datetime import datetime

from pydantic import BaseModel

from shelf.domain.model.media import Media
from shelf.domain.value import FileType, MediaType


class MediaFileItem(BaseModel):
    """Stored file of a media entry."""

    id: str
    file_url: str
    file_type: FileType
    created_at: datetime


class MediaItem(BaseModel):
    """Media entry with its files and tags."""

    id: str
    title: str
    author: str | None
    description: str | None
    language: str | None
    publication_date: str | None
    media_type: MediaType
    cover_url: str | None
    uploaded_by: str
    uploaded_at: datetime
    deleted_at: datetime | None
    files: list[MediaFileItem]
    tags: list[str]

    @classmethod
    def from_media(cls, media: Media) -> "MediaItem":
        """Build the response item for a media aggregate."""
        return cls(
            id=str(media.id),
            title=media.title,
            author=media.author,
            description=media.description,
            language=media.language,
            publication_date=media.publication_date,
            media_type=media.media_type,
            cover_url=media.cover_url,
            uploaded_by=str(media.uploaded_by),
            uploaded_at=media.uploaded_at,
            deleted_at=media.deleted_at,
            files=[
                MediaFileItem(
                    id=str(f.id),
                    file_url=f.file_url,
                    file_type=f.file_type,
                    created_at=f.created_at,
                )
                for f in media.files
            ],
            tags=[tag.root for tag in media.tags],
        )
