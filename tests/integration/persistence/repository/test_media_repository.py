"""Integration tests for the media, tag and collection repositories."""

from datetime import timedelta
from uuid import uuid4

import pytest

from shelf.domain.model import Collection, User
from shelf.domain.model.common import utcnow
from shelf.domain.repository import (
    CollectionRepository,
    MediaRepository,
    TagRepository,
    UserRepository,
)
from shelf.domain.value import CollectionId, FileType, MediaType, TagName, UserId
from tests.conftest import make_file, make_media
from tests.harness import create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})


async def create_uploader(env) -> UserId:
    """Insert a member to own media."""
    user_repo = await env.get(UserRepository)
    user = User(id=UserId(uuid4()), display_name="Uploader")
    await user_repo.save(user)
    return user.id


class TestMediaRepositoryIntegration:
    """Integration tests for PostgresMediaRepository."""

    @pytest.mark.asyncio
    async def test_save_hydrates_files_and_tags(self, integration_env):
        """Files and tag names come back with the media row."""
        # Arrange
        media_repo = await integration_env.get(MediaRepository)
        tag_repo = await integration_env.get(TagRepository)
        uploader = await create_uploader(integration_env)
        media = make_media(uploader).model_copy(update={"media_type": MediaType.PAPER})
        await media_repo.save(media)
        epub = await media_repo.add_file(make_file(media, FileType.EPUB))
        tag = await tag_repo.get_or_create(TagName(f"tag-{uuid4().hex[:8]}"))
        await tag_repo.replace_media_tags(media.id, [tag.id])

        # Act
        found = await media_repo.find_by_id(media.id)

        # Assert
        assert found is not None
        assert found.media_type == MediaType.PAPER
        assert [f.id for f in found.files] == [epub.id]
        assert found.tags == [tag.name]

    @pytest.mark.asyncio
    async def test_get_or_create_tag_is_idempotent(self, integration_env):
        """The same name always yields the same tag."""
        # Arrange
        tag_repo = await integration_env.get(TagRepository)
        name = TagName(f"tag-{uuid4().hex[:8]}")

        # Act
        first = await tag_repo.get_or_create(name)
        second = await tag_repo.get_or_create(name)

        # Assert
        assert first.id == second.id

    @pytest.mark.asyncio
    async def test_soft_delete_and_restore_are_guarded(self, integration_env):
        """Each transition only applies from the opposite state."""
        # Arrange
        media_repo = await integration_env.get(MediaRepository)
        uploader = await create_uploader(integration_env)
        media = make_media(uploader)
        await media_repo.save(media)

        # Act
        deleted = await media_repo.soft_delete(media.id, utcnow())
        deleted_again = await media_repo.soft_delete(media.id, utcnow())
        trash = await media_repo.find_deleted_by_owner(uploader)
        restored = await media_repo.restore(media.id)
        restored_again = await media_repo.restore(media.id)

        # Assert
        assert (deleted, deleted_again) == (True, False)
        assert [m.id for m in trash] == [media.id]
        assert (restored, restored_again) == (True, False)
        active = await media_repo.find_active_by_ids([media.id])
        assert [m.id for m in active] == [media.id]

    @pytest.mark.asyncio
    async def test_purge_removes_expired_media_only(self, integration_env):
        """Rows deleted before the cutoff go; recent deletions stay."""
        # Arrange
        media_repo = await integration_env.get(MediaRepository)
        tag_repo = await integration_env.get(TagRepository)
        collection_repo = await integration_env.get(CollectionRepository)
        uploader = await create_uploader(integration_env)
        now = utcnow()
        cutoff = now - timedelta(days=7)

        old = make_media(uploader, title="Old")
        fresh = make_media(uploader, title="Fresh")
        for media in (old, fresh):
            await media_repo.save(media)
            await media_repo.add_file(make_file(media))
        tag = await tag_repo.get_or_create(TagName(f"tag-{uuid4().hex[:8]}"))
        await tag_repo.replace_media_tags(old.id, [tag.id])
        collection = Collection(id=CollectionId(uuid4()), name="Shelf", user_id=uploader)
        await collection_repo.save(collection)
        await collection_repo.add_media(collection.id, old.id)
        await media_repo.soft_delete(old.id, now - timedelta(days=8))
        await media_repo.soft_delete(fresh.id, now - timedelta(days=1))

        # Act
        locked = await media_repo.lock_purgeable([old.id, fresh.id], cutoff)
        await tag_repo.unlink_media(locked)
        await collection_repo.unlink_media(locked)
        await media_repo.delete_files(locked)
        purged = await media_repo.delete_purged(locked, cutoff)

        # Assert
        assert locked == [old.id]
        assert purged == 1
        assert await media_repo.find_by_id(old.id) is None
        assert await media_repo.find_by_id(fresh.id) is not None
        assert await collection_repo.find_media_ids(collection.id) == []
        assert await tag_repo.find_by_name(tag.name) is not None


class TestCollectionRepositoryIntegration:
    """Integration tests for PostgresCollectionRepository."""

    @pytest.mark.asyncio
    async def test_membership(self, integration_env):
        """Links are idempotent and removable."""
        # Arrange
        media_repo = await integration_env.get(MediaRepository)
        collection_repo = await integration_env.get(CollectionRepository)
        owner = await create_uploader(integration_env)
        media = make_media(owner)
        await media_repo.save(media)
        collection = Collection(id=CollectionId(uuid4()), name="Reading", user_id=owner)
        await collection_repo.save(collection)

        # Act
        await collection_repo.add_media(collection.id, media.id)
        await collection_repo.add_media(collection.id, media.id)
        linked = await collection_repo.find_media_ids(collection.id)
        removed = await collection_repo.remove_media(collection.id, media.id)
        removed_again = await collection_repo.remove_media(collection.id, media.id)

        # Assert
        assert linked == [media.id]
        assert (removed, removed_again) == (True, False)
        found = await collection_repo.find_by_owner_and_name(owner, "Reading")
        assert found is not None
        assert found.id == collection.id
