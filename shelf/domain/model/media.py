"""Media aggregate root.

Media is a library entry (book, magazine, paper or article) with up to one
file per format. Media moves through Active -> SoftDeleted -> Purged, with
restore as the only way back.
"""

import math
from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import (
    FileType,
    MediaFileId,
    MediaId,
    MediaType,
    TagName,
    UserId,
)
from shelf.domain.value.types import (
    AUTHOR_MAX_LENGTH,
    DATE_MAX_LENGTH,
    LANGUAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)

SECONDS_PER_DAY = 24 * 60 * 60


class MediaFile(DomainModel):
    """Stored file belonging to a media entry."""

    id: MediaFileId
    media_id: MediaId
    file_url: str = Field(min_length=1)
    file_type: FileType
    created_at: datetime = Field(default_factory=utcnow)


class Media(DomainModel):
    """Media aggregate root.

    ``deleted_at`` None means active. Soft-deleted media is hidden from
    every default listing and purged once the grace window has elapsed.
    """

    id: MediaId
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    author: Optional[str] = Field(default=None, max_length=AUTHOR_MAX_LENGTH)
    description: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)
    publication_date: Optional[str] = Field(default=None, max_length=DATE_MAX_LENGTH)
    media_type: MediaType = MediaType.BOOK
    cover_url: Optional[str] = None
    uploaded_by: UserId
    uploaded_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None
    files: list[MediaFile] = Field(default_factory=list)
    tags: list[TagName] = Field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        """Whether the media is in the trash."""
        return self.deleted_at is not None

    def is_owned_by(self, user_id: UserId) -> bool:
        """Whether ``user_id`` uploaded this media."""
        return self.uploaded_by == user_id

    def file_of_type(self, file_type: FileType) -> MediaFile | None:
        """Return the attached file of the given type, if any."""
        return next((f for f in self.files if f.file_type == file_type), None)

    def artifact_urls(self) -> list[str]:
        """URLs of every stored artifact: files first, then the cover."""
        urls = [f.file_url for f in self.files]
        if self.cover_url:
            urls.append(self.cover_url)
        return urls

    def purge_after(self, retention_days: int) -> datetime | None:
        """Moment after which the sweeper may purge this media."""
        if self.deleted_at is None:
            return None
        return self.deleted_at + timedelta(days=retention_days)

    def days_remaining(self, now: datetime, retention_days: int) -> int | None:
        """Whole days left before purge, rounded up and never negative.

        Returns:
            None for active media
        """
        purge_after = self.purge_after(retention_days)
        if purge_after is None:
            return None
        seconds = (purge_after - now).total_seconds()
        return max(0, math.ceil(seconds / SECONDS_PER_DAY))
