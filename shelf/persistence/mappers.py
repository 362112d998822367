"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from shelf.domain.model import (
    Collection,
    Invitation,
    Media,
    MediaFile,
    Tag,
    User,
    UserIdentity,
)
from shelf.domain.value import (
    AuthProvider,
    CollectionId,
    Email,
    FileType,
    InvitationId,
    InvitationToken,
    MediaFileId,
    MediaId,
    MediaType,
    TagId,
    TagName,
    UserId,
    UserIdentityId,
)


def _uuid(value: Any) -> UUID:
    """asyncpg returns UUID objects, other drivers may return strings."""
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=Email(row["email"]) if row.get("email") else None,
        display_name=row["display_name"],
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_user_identity(row: Dict[str, Any]) -> UserIdentity:
    """Convert database row to UserIdentity domain model."""
    return UserIdentity(
        id=UserIdentityId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        provider_handle=row["provider_handle"],
        provider_email=row.get("provider_email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_login_at=row.get("last_login_at"),
    )


def user_identity_to_dict(identity: UserIdentity) -> Dict[str, Any]:
    """Convert UserIdentity domain model to database dict."""
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        token=InvitationToken(row["token"]),
        email=Email(row["email"]) if row.get("email") else None,
        created_by=UserId(_uuid(row["created_by"])),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        used_at=row.get("used_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    # Email and InvitationToken dump to their primitive values
    return invitation.model_dump()


def row_to_media_file(row: Dict[str, Any]) -> MediaFile:
    """Convert database row to MediaFile domain model."""
    return MediaFile(
        id=MediaFileId(_uuid(row["id"])),
        media_id=MediaId(_uuid(row["media_id"])),
        file_url=row["file_url"],
        file_type=FileType(row["file_type"]),
        created_at=row["created_at"],
    )


def media_file_to_dict(media_file: MediaFile) -> Dict[str, Any]:
    """Convert MediaFile domain model to database dict."""
    data = media_file.model_dump()
    data["file_type"] = media_file.file_type.value
    return data


def row_to_media(
    row: Dict[str, Any],
    files: Iterable[MediaFile] = (),
    tag_names: Iterable[str] = (),
) -> Media:
    """Convert database row to Media domain model.

    Args:
        row: Database row as dict
        files: Files already loaded for this media
        tag_names: Tag names already loaded for this media

    Returns:
        Media domain model
    """
    return Media(
        id=MediaId(_uuid(row["id"])),
        title=row["title"],
        author=row.get("author"),
        description=row.get("description"),
        language=row.get("language"),
        publication_date=row.get("publication_date"),
        media_type=MediaType.parse(row.get("media_type")),
        cover_url=row.get("cover_url"),
        uploaded_by=UserId(_uuid(row["uploaded_by"])),
        uploaded_at=row["uploaded_at"],
        deleted_at=row.get("deleted_at"),
        files=list(files),
        tags=[TagName(name) for name in tag_names],
    )


def media_to_dict(media: Media) -> Dict[str, Any]:
    """Convert Media domain model to a media row.

    Files and tags live in their own tables and are excluded.
    """
    data = media.model_dump(exclude={"files", "tags"})
    data["media_type"] = media.media_type.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        created_at=row["created_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return tag.model_dump()


def row_to_collection(row: Dict[str, Any]) -> Collection:
    """Convert database row to Collection domain model."""
    return Collection(
        id=CollectionId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description"),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def collection_to_dict(collection: Collection) -> Dict[str, Any]:
    """Convert Collection domain model to database dict."""
    return collection.model_dump()
