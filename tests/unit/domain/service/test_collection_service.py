"""Unit tests for CollectionService."""

from uuid import uuid4

import pytest

from shelf.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from shelf.domain.repository import MediaRepository
from shelf.domain.service import CollectionService, LifecycleService
from shelf.domain.value import CollectionId, MediaId, UserId
from tests.conftest import make_media
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateCollection:
    """Tests for create_collection method."""

    @pytest.mark.asyncio
    async def test_create_trims_name(self, unit_env):
        """Names and descriptions are trimmed."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())

        # Act
        collection = await collection_service.create_collection(
            owner, "  To read  ", "  later  "
        )

        # Assert
        assert collection.name == "To read"
        assert collection.description == "later"
        assert collection.user_id == owner

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, unit_env):
        """A name is required."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await collection_service.create_collection(UserId(uuid4()), "   ")

    @pytest.mark.asyncio
    async def test_duplicate_name_per_owner(self, unit_env):
        """Names are unique per owner, not globally."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())
        await collection_service.create_collection(owner, "Favourites")

        # Act & Assert
        with pytest.raises(ConflictError):
            await collection_service.create_collection(owner, "Favourites")

        other = await collection_service.create_collection(UserId(uuid4()), "Favourites")
        assert other.name == "Favourites"


class TestUpdateCollection:
    """Tests for update_collection method."""

    @pytest.mark.asyncio
    async def test_rename(self, unit_env):
        """Renaming keeps the description unless one is given."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())
        collection = await collection_service.create_collection(owner, "Old", "desc")

        # Act
        updated = await collection_service.update_collection(
            collection.id, owner, name="New"
        )

        # Assert
        assert updated.name == "New"
        assert updated.description == "desc"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, unit_env):
        """Renaming onto another collection's name conflicts."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())
        await collection_service.create_collection(owner, "A")
        second = await collection_service.create_collection(owner, "B")

        # Act & Assert
        with pytest.raises(ConflictError):
            await collection_service.update_collection(second.id, owner, name="A")

    @pytest.mark.asyncio
    async def test_foreign_collection_forbidden(self, unit_env):
        """Only the owner may modify a collection."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        collection = await collection_service.create_collection(UserId(uuid4()), "A")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await collection_service.update_collection(
                collection.id, UserId(uuid4()), name="Mine"
            )


class TestMembership:
    """Tests for add_media, remove_media and the member view."""

    @pytest.mark.asyncio
    async def test_add_is_idempotent(self, unit_env):
        """Adding the same media twice keeps one membership."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        media_repo = await unit_env.get(MediaRepository)
        owner = UserId(uuid4())
        media = await media_repo.save(make_media(UserId(uuid4())))
        collection = await collection_service.create_collection(owner, "Shelf")

        # Act
        await collection_service.add_media(collection.id, owner, media.id)
        await collection_service.add_media(collection.id, owner, media.id)
        _, members = await collection_service.get_collection(collection.id, owner)

        # Assert
        assert [m.id for m in members] == [media.id]

    @pytest.mark.asyncio
    async def test_deleted_media_hidden_until_restored(self, unit_env):
        """Trashed media keeps its membership but drops out of the view."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        lifecycle = await unit_env.get(LifecycleService)
        media_repo = await unit_env.get(MediaRepository)
        owner = UserId(uuid4())
        media = await media_repo.save(make_media(owner))
        collection = await collection_service.create_collection(owner, "Shelf")
        await collection_service.add_media(collection.id, owner, media.id)

        # Act
        await lifecycle.soft_delete(media.id, owner)
        _, while_deleted = await collection_service.get_collection(collection.id, owner)
        await lifecycle.restore(media.id, owner)
        _, after_restore = await collection_service.get_collection(collection.id, owner)

        # Assert
        assert while_deleted == []
        assert [m.id for m in after_restore] == [media.id]

    @pytest.mark.asyncio
    async def test_cannot_add_deleted_or_missing_media(self, unit_env):
        """Only active media can be added."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        lifecycle = await unit_env.get(LifecycleService)
        media_repo = await unit_env.get(MediaRepository)
        owner = UserId(uuid4())
        media = await media_repo.save(make_media(owner))
        await lifecycle.soft_delete(media.id, owner)
        collection = await collection_service.create_collection(owner, "Shelf")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await collection_service.add_media(collection.id, owner, media.id)
        with pytest.raises(NotFoundError):
            await collection_service.add_media(collection.id, owner, MediaId(uuid4()))

    @pytest.mark.asyncio
    async def test_remove_missing_membership(self, unit_env):
        """Removing media that is not a member is NotFound."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())
        collection = await collection_service.create_collection(owner, "Shelf")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await collection_service.remove_media(
                collection.id, owner, MediaId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_delete_collection_keeps_media(self, unit_env):
        """Deleting a collection never touches its media."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        media_repo = await unit_env.get(MediaRepository)
        owner = UserId(uuid4())
        media = await media_repo.save(make_media(owner))
        collection = await collection_service.create_collection(owner, "Shelf")
        await collection_service.add_media(collection.id, owner, media.id)

        # Act
        await collection_service.delete_collection(collection.id, owner)

        # Assert
        assert await media_repo.find_by_id(media.id) is not None
        with pytest.raises(NotFoundError):
            await collection_service.get_collection(collection.id, owner)

    @pytest.mark.asyncio
    async def test_missing_collection(self, unit_env):
        """Unknown collection ids are NotFound."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await collection_service.get_collection(
                CollectionId(uuid4()), UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_list_collections_by_name(self, unit_env):
        """Collections are listed by name with their active media."""
        # Arrange
        collection_service = await unit_env.get(CollectionService)
        owner = UserId(uuid4())
        await collection_service.create_collection(owner, "Zeta")
        await collection_service.create_collection(owner, "Alpha")
        await collection_service.create_collection(UserId(uuid4()), "Other")

        # Act
        listed = await collection_service.list_collections(owner)

        # Assert
        assert [c.name for c, _ in listed] == ["Alpha", "Zeta"]
