"""Test configuration and shared builders."""

from datetime import datetime, timedelta
from uuid import uuid4

from shelf.domain.model import Invitation, Media, MediaFile
from shelf.domain.model.common import utcnow
from shelf.domain.value import (
    Email,
    FileType,
    InvitationId,
    InvitationToken,
    MediaFileId,
    MediaId,
    UserId,
)


def make_invitation(
    created_by: UserId | None = None,
    email: str | None = None,
    token: str | None = None,
    created_at: datetime | None = None,
    expires_in: timedelta = timedelta(days=7),
    used_at: datetime | None = None,
) -> Invitation:
    """Build an invitation with sensible defaults."""
    created_at = created_at or utcnow()
    return Invitation(
        id=InvitationId(uuid4()),
        token=InvitationToken(token or uuid4().hex),
        email=Email(email) if email else None,
        created_by=created_by or UserId(uuid4()),
        created_at=created_at,
        expires_at=created_at + expires_in,
        used_at=used_at,
    )


def make_media(
    uploaded_by: UserId,
    title: str = "Dune",
    uploaded_at: datetime | None = None,
    cover_url: str | None = None,
) -> Media:
    """Build an active media row without files."""
    return Media(
        id=MediaId(uuid4()),
        title=title,
        uploaded_by=uploaded_by,
        uploaded_at=uploaded_at or utcnow(),
        cover_url=cover_url,
    )


def make_file(media: Media, file_type: FileType = FileType.EPUB) -> MediaFile:
    """Build a file row for ``media``."""
    return MediaFile(
        id=MediaFileId(uuid4()),
        media_id=media.id,
        file_url=f"https://blob.example.com/{media.id}.{file_type.value}",
        file_type=file_type,
        created_at=utcnow(),
    )
