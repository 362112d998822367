"""Collection domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from shelf.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from shelf.domain.model.collection import Collection
from shelf.domain.model.common import utcnow
from shelf.domain.model.media import Media
from shelf.domain.repository import CollectionRepository, MediaRepository
from shelf.domain.value import CollectionId, MediaId, UserId

from .base import Service


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Collection name is required")
    if len(name) > 255:
        raise ValidationError("Collection name must be at most 255 characters")
    return name


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None


class CollectionService(Service):
    """Domain service for user collections."""

    def __init__(
        self,
        collection_repository: CollectionRepository,
        media_repository: MediaRepository,
    ) -> None:
        """Initialize collection service.

        Args:
            collection_repository: Collection repository
            media_repository: Media repository, for membership views
        """
        self.collection_repository = collection_repository
        self.media_repository = media_repository

    async def list_collections(
        self, user_id: UserId
    ) -> list[tuple[Collection, list[Media]]]:
        """List a user's collections ordered by name, with their active media.

        Args:
            user_id: Owner

        Returns:
            Pairs of collection and its active media
        """
        with logfire.span("collection_service.list_collections", user_id=str(user_id)):
            collections = await self.collection_repository.find_by_owner(user_id)
            result = [(c, await self._active_media(c.id)) for c in collections]
            logfire.info("Collections listed", count=len(result))
            return result

    async def create_collection(
        self,
        user_id: UserId,
        name: str | None,
        description: str | None = None,
        now: datetime | None = None,
    ) -> Collection:
        """Create a collection.

        Raises:
            ValidationError: If the name is blank or too long
            ConflictError: If the user already has a collection with that name
        """
        now = now or utcnow()
        with logfire.span("collection_service.create_collection", user_id=str(user_id)):
            name = _clean_name(name)
            if await self.collection_repository.find_by_owner_and_name(user_id, name):
                raise ConflictError(f"Collection already exists: {name}")

            collection = Collection(
                id=CollectionId(uuid4()),
                name=name,
                description=_clean_description(description),
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.collection_repository.save(collection)
            except IntegrityError:
                raise ConflictError(f"Collection already exists: {name}")

            logfire.info("Collection created", collection_id=str(saved.id))
            return saved

    async def get_collection(
        self, collection_id: CollectionId, user_id: UserId
    ) -> tuple[Collection, list[Media]]:
        """Get an owned collection with its active media.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
        """
        with logfire.span(
            "collection_service.get_collection", collection_id=str(collection_id)
        ):
            collection = await self._get_owned(collection_id, user_id)
            return collection, await self._active_media(collection_id)

    async def update_collection(
        self,
        collection_id: CollectionId,
        user_id: UserId,
        name: str | None = None,
        description: str | None = None,
        now: datetime | None = None,
    ) -> Collection:
        """Rename or re-describe an owned collection.

        ``None`` leaves a field unchanged.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
            ValidationError: If the new name is blank
            ConflictError: If the new name is taken by another collection
        """
        now = now or utcnow()
        with logfire.span(
            "collection_service.update_collection", collection_id=str(collection_id)
        ):
            collection = await self._get_owned(collection_id, user_id)
            updates: dict = {"updated_at": now}

            if name is not None:
                name = _clean_name(name)
                existing = await self.collection_repository.find_by_owner_and_name(
                    user_id, name
                )
                if existing and existing.id != collection_id:
                    raise ConflictError(f"Collection already exists: {name}")
                updates["name"] = name
            if description is not None:
                updates["description"] = _clean_description(description)

            try:
                saved = await self.collection_repository.save(
                    collection.model_copy(update=updates)
                )
            except IntegrityError:
                raise ConflictError(f"Collection already exists: {name}")

            logfire.info("Collection updated", collection_id=str(collection_id))
            return saved

    async def delete_collection(
        self, collection_id: CollectionId, user_id: UserId
    ) -> None:
        """Delete an owned collection. Member media is untouched.

        Raises:
            NotFoundError: If the collection does not exist
            ForbiddenError: If the caller does not own it
        """
        with logfire.span(
            "collection_service.delete_collection", collection_id=str(collection_id)
        ):
            await self._get_owned(collection_id, user_id)
            await self.collection_repository.delete(collection_id)
            logfire.info("Collection deleted", collection_id=str(collection_id))

    async def add_media(
        self, collection_id: CollectionId, user_id: UserId, media_id: MediaId
    ) -> None:
        """Add active media to an owned collection. Idempotent.

        Raises:
            NotFoundError: If the collection or media does not exist, or the
                media is deleted
            ForbiddenError: If the caller does not own the collection
        """
        with logfire.span(
            "collection_service.add_media",
            collection_id=str(collection_id),
            media_id=str(media_id),
        ):
            await self._get_owned(collection_id, user_id)
            media = await self.media_repository.find_by_id(media_id)
            if not media or media.is_deleted:
                raise NotFoundError("Media", str(media_id))
            await self.collection_repository.add_media(collection_id, media_id)
            logfire.info(
                "Media added to collection",
                collection_id=str(collection_id),
                media_id=str(media_id),
            )

    async def remove_media(
        self, collection_id: CollectionId, user_id: UserId, media_id: MediaId
    ) -> None:
        """Remove media from an owned collection.

        Raises:
            NotFoundError: If the collection does not exist or the media is
                not in it
            ForbiddenError: If the caller does not own the collection
        """
        with logfire.span(
            "collection_service.remove_media",
            collection_id=str(collection_id),
            media_id=str(media_id),
        ):
            await self._get_owned(collection_id, user_id)
            removed = await self.collection_repository.remove_media(
                collection_id, media_id
            )
            if not removed:
                raise NotFoundError("Collection media", str(media_id))
            logfire.info(
                "Media removed from collection",
                collection_id=str(collection_id),
                media_id=str(media_id),
            )

    async def _get_owned(
        self, collection_id: CollectionId, user_id: UserId
    ) -> Collection:
        collection = await self.collection_repository.find_by_id(collection_id)
        if not collection:
            raise NotFoundError("Collection", str(collection_id))
        if not collection.is_owned_by(user_id):
            logfire.warn(
                "Access to foreign collection",
                collection_id=str(collection_id),
                user_id=str(user_id),
            )
            raise ForbiddenError("Collection", str(collection_id), str(user_id))
        return collection

    async def _active_media(self, collection_id: CollectionId) -> list[Media]:
        media_ids = await self.collection_repository.find_media_ids(collection_id)
        if not media_ids:
            return []
        return await self.media_repository.find_active_by_ids(media_ids)
