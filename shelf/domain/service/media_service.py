"""Media domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from shelf.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from shelf.domain.model.common import utcnow
from shelf.domain.model.media import Media, MediaFile
from shelf.domain.repository import MediaRepository
from shelf.domain.value import (
    FileType,
    MediaChanges,
    MediaFileId,
    MediaId,
    MediaMetadata,
    MediaType,
    UserId,
)

from .base import Service
from .tag_service import TagService


class MediaService(Service):
    """Domain service for creating, reading and editing media."""

    def __init__(
        self, media_repository: MediaRepository, tag_service: TagService
    ) -> None:
        """Initialize media service.

        Args:
            media_repository: Media repository
            tag_service: Tag domain service
        """
        self.media_repository = media_repository
        self.tag_service = tag_service

    async def get_media(
        self, media_id: MediaId, requester: UserId | None = None
    ) -> Media:
        """Get media by ID.

        Soft-deleted media is only visible to its uploader.

        Args:
            media_id: Media ID
            requester: Caller, None for anonymous access

        Returns:
            Media with files and tags

        Raises:
            NotFoundError: If missing, or deleted and not owned by the caller
        """
        with logfire.span("media_service.get_media", media_id=str(media_id)):
            media = await self.media_repository.find_by_id(media_id)
            if not media:
                logfire.warn("Media not found", media_id=str(media_id))
                raise NotFoundError("Media", str(media_id))
            if media.is_deleted and (
                requester is None or not media.is_owned_by(requester)
            ):
                logfire.warn("Deleted media hidden", media_id=str(media_id))
                raise NotFoundError("Media", str(media_id))
            return media

    async def upload(
        self,
        metadata: MediaMetadata,
        file_url: str,
        content_type: str | None,
        requester: UserId,
        now: datetime | None = None,
    ) -> Media:
        """Register an uploaded blob.

        With ``metadata.media_id`` the blob becomes another file of existing
        media, otherwise new media is created around it.

        Args:
            metadata: Upload metadata
            file_url: Public URL of the stored blob
            content_type: Content type reported for the blob
            requester: Uploader
            now: Upload time

        Returns:
            The created or updated media
        """
        file_type = FileType.from_content_type(content_type)
        if metadata.media_id is not None:
            return await self.add_file(
                metadata.media_id, file_url, file_type, requester, now
            )
        return await self.create_media(metadata, file_url, file_type, requester, now)

    async def create_media(
        self,
        metadata: MediaMetadata,
        file_url: str,
        file_type: FileType,
        requester: UserId,
        now: datetime | None = None,
    ) -> Media:
        """Create media with its first file and tags.

        Raises:
            ValidationError: If no title was given
        """
        now = now or utcnow()
        with logfire.span(
            "media_service.create_media",
            uploaded_by=str(requester),
            file_type=file_type.value,
        ):
            if not metadata.title:
                raise ValidationError("Title is required for new media")

            media = Media(
                id=MediaId(uuid4()),
                title=metadata.title,
                author=metadata.author,
                description=metadata.description,
                language=metadata.language,
                publication_date=metadata.publication_date,
                media_type=metadata.media_type,
                uploaded_by=requester,
                uploaded_at=now,
            )
            await self.media_repository.save(media)
            await self.media_repository.add_file(
                MediaFile(
                    id=MediaFileId(uuid4()),
                    media_id=media.id,
                    file_url=file_url,
                    file_type=file_type,
                    created_at=now,
                )
            )
            if metadata.tags:
                await self.tag_service.set_media_tags(media.id, metadata.tags)

            logfire.info(
                "Media created",
                media_id=str(media.id),
                uploaded_by=str(requester),
                tags=len(metadata.tags),
            )
            return await self._reload(media.id)

    async def add_file(
        self,
        media_id: MediaId,
        file_url: str,
        file_type: FileType,
        requester: UserId,
        now: datetime | None = None,
    ) -> Media:
        """Attach another format to existing media.

        Raises:
            NotFoundError: If the media is missing or deleted
            ForbiddenError: If the caller is not the uploader
            ConflictError: If the media already has a file of this type
        """
        now = now or utcnow()
        with logfire.span(
            "media_service.add_file",
            media_id=str(media_id),
            file_type=file_type.value,
        ):
            media = await self.media_repository.find_by_id(media_id)
            if not media or media.is_deleted:
                raise NotFoundError("Media", str(media_id))
            if not media.is_owned_by(requester):
                logfire.warn(
                    "File upload to foreign media",
                    media_id=str(media_id),
                    user_id=str(requester),
                )
                raise ForbiddenError("Media", str(media_id), str(requester))

            message = f"A {file_type.value.upper()} file already exists for this media"
            if media.file_of_type(file_type):
                raise ConflictError(message)

            try:
                await self.media_repository.add_file(
                    MediaFile(
                        id=MediaFileId(uuid4()),
                        media_id=media_id,
                        file_url=file_url,
                        file_type=file_type,
                        created_at=now,
                    )
                )
            except IntegrityError:
                # Concurrent upload of the same format
                logfire.warn(
                    "Duplicate file type", media_id=str(media_id), file_type=file_type
                )
                raise ConflictError(message)

            logfire.info(
                "File added", media_id=str(media_id), file_type=file_type.value
            )
            return await self._reload(media_id)

    async def update_media(
        self, media_id: MediaId, requester: UserId, changes: MediaChanges
    ) -> Media:
        """Edit media fields as the uploader.

        Args:
            media_id: Media to edit
            requester: Caller
            changes: Fields present in the request

        Returns:
            Updated media

        Raises:
            NotFoundError: If the media does not exist
            ForbiddenError: If the caller is not the uploader
            InvalidStateError: If the media is in the trash
        """
        with logfire.span(
            "media_service.update_media",
            media_id=str(media_id),
            fields=sorted(changes.model_fields_set),
        ):
            media = await self.media_repository.find_by_id(media_id)
            if not media:
                raise NotFoundError("Media", str(media_id))
            if not media.is_owned_by(requester):
                raise ForbiddenError("Media", str(media_id), str(requester))
            if media.is_deleted:
                raise InvalidStateError("Restore the media before editing it")

            provided = changes.model_fields_set
            updates: dict = {}
            if changes.title:
                updates["title"] = changes.title
            for field in ("author", "description", "language", "publication_date"):
                if field in provided:
                    updates[field] = getattr(changes, field)
            if "media_type" in provided:
                updates["media_type"] = MediaType.parse(
                    changes.media_type, default=media.media_type
                )

            if updates:
                await self.media_repository.save(media.model_copy(update=updates))
            if changes.tags is not None:
                await self.tag_service.set_media_tags(media_id, changes.tags)

            logfire.info(
                "Media updated", media_id=str(media_id), fields=sorted(updates)
            )
            return await self._reload(media_id)

    async def _reload(self, media_id: MediaId) -> Media:
        media = await self.media_repository.find_by_id(media_id)
        if not media:
            raise NotFoundError("Media", str(media_id))
        return media
