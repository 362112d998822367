"""Unit tests for MediaService."""

from uuid import uuid4

import pytest

from shelf.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from shelf.domain.repository import MediaRepository
from shelf.domain.service import LifecycleService, MediaService
from shelf.domain.value import (
    FileType,
    MediaChanges,
    MediaId,
    MediaMetadata,
    MediaType,
    TagName,
    UserId,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

EPUB = "application/epub+zip"
PDF = "application/pdf"


async def upload_book(media_service, owner, **metadata):
    metadata.setdefault("title", "Dune")
    return await media_service.upload(
        MediaMetadata(**metadata),
        "https://blob.example.com/dune.epub",
        EPUB,
        owner,
    )


class TestUpload:
    """Tests for upload method."""

    @pytest.mark.asyncio
    async def test_new_media_with_first_file(self, unit_env):
        """Uploading without a media id creates media around the file."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        owner = UserId(uuid4())

        # Act
        media = await upload_book(
            media_service,
            owner,
            author="Frank Herbert",
            media_type="Magazine",
            tags="sci-fi, classic, sci-fi",
        )

        # Assert
        assert media.title == "Dune"
        assert media.author == "Frank Herbert"
        assert media.media_type == MediaType.MAGAZINE
        assert media.uploaded_by == owner
        assert [f.file_type for f in media.files] == [FileType.EPUB]
        assert sorted(t.root for t in media.tags) == ["classic", "sci-fi"]

    @pytest.mark.asyncio
    async def test_unknown_media_type_defaults_to_book(self, unit_env):
        """Unrecognised media types are replaced, not rejected."""
        # Arrange
        media_service = await unit_env.get(MediaService)

        # Act
        media = await upload_book(media_service, UserId(uuid4()), media_type="Scroll")

        # Assert
        assert media.media_type == MediaType.BOOK

    @pytest.mark.asyncio
    async def test_title_required_for_new_media(self, unit_env):
        """A blank title is rejected when creating media."""
        # Arrange
        media_service = await unit_env.get(MediaService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await upload_book(media_service, UserId(uuid4()), title="   ")

    @pytest.mark.asyncio
    async def test_one_file_per_format(self, unit_env):
        """A second EPUB conflicts, a PDF is added alongside."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        media_repo = await unit_env.get(MediaRepository)
        owner = UserId(uuid4())
        media = await upload_book(media_service, owner)

        # Act & Assert
        with pytest.raises(ConflictError):
            await media_service.upload(
                MediaMetadata(media_id=media.id),
                "https://blob.example.com/dune-2.epub",
                EPUB,
                owner,
            )

        updated = await media_service.upload(
            MediaMetadata(media_id=media.id),
            "https://blob.example.com/dune.pdf",
            PDF,
            owner,
        )

        assert {f.file_type for f in updated.files} == {FileType.EPUB, FileType.PDF}
        assert media_repo.file_count(media.id) == 2

    @pytest.mark.asyncio
    async def test_other_content_types_stored_as_pdf(self, unit_env):
        """Anything that is not EPUB is recorded as PDF."""
        # Arrange
        media_service = await unit_env.get(MediaService)

        # Act
        media = await media_service.upload(
            MediaMetadata(title="Report"),
            "https://blob.example.com/report.bin",
            None,
            UserId(uuid4()),
        )

        # Assert
        assert media.files[0].file_type == FileType.PDF

    @pytest.mark.asyncio
    async def test_add_file_to_foreign_media_forbidden(self, unit_env):
        """Only the uploader can attach formats."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        media = await upload_book(media_service, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await media_service.upload(
                MediaMetadata(media_id=media.id),
                "https://blob.example.com/dune.pdf",
                PDF,
                UserId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_add_file_to_missing_media(self, unit_env):
        """Attaching to an unknown media id is NotFound."""
        # Arrange
        media_service = await unit_env.get(MediaService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await media_service.upload(
                MediaMetadata(media_id=MediaId(uuid4())),
                "https://blob.example.com/x.pdf",
                PDF,
                UserId(uuid4()),
            )


class TestGetMedia:
    """Tests for get_media method."""

    @pytest.mark.asyncio
    async def test_deleted_media_visible_to_owner_only(self, unit_env):
        """Soft-deleted media is hidden from everyone but its uploader."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        lifecycle = await unit_env.get(LifecycleService)
        owner = UserId(uuid4())
        media = await upload_book(media_service, owner)
        await lifecycle.soft_delete(media.id, owner)

        # Act
        seen_by_owner = await media_service.get_media(media.id, owner)

        # Assert
        assert seen_by_owner.is_deleted
        with pytest.raises(NotFoundError):
            await media_service.get_media(media.id, UserId(uuid4()))
        with pytest.raises(NotFoundError):
            await media_service.get_media(media.id)


class TestUpdateMedia:
    """Tests for update_media method."""

    @pytest.mark.asyncio
    async def test_only_present_fields_change(self, unit_env):
        """Absent fields keep their values, explicit nulls clear them."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        owner = UserId(uuid4())
        media = await upload_book(
            media_service, owner, author="Frank Herbert", language="en"
        )

        # Act
        updated = await media_service.update_media(
            media.id,
            owner,
            MediaChanges.model_validate({"description": "Desert planet", "language": None}),
        )

        # Assert
        assert updated.title == "Dune"
        assert updated.author == "Frank Herbert"
        assert updated.description == "Desert planet"
        assert updated.language is None

    @pytest.mark.asyncio
    async def test_blank_title_and_unknown_type_keep_current(self, unit_env):
        """A blank title or unknown type does not overwrite the current value."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        owner = UserId(uuid4())
        media = await upload_book(media_service, owner, media_type="Paper")

        # Act
        updated = await media_service.update_media(
            media.id,
            owner,
            MediaChanges.model_validate({"title": "  ", "media_type": "Scroll"}),
        )

        # Assert
        assert updated.title == "Dune"
        assert updated.media_type == MediaType.PAPER

    @pytest.mark.asyncio
    async def test_tags_replace_whole_set(self, unit_env):
        """Provided tags replace the previous set; an empty list clears it."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        owner = UserId(uuid4())
        media = await upload_book(media_service, owner, tags=["old", "keep"])

        # Act
        replaced = await media_service.update_media(
            media.id, owner, MediaChanges(tags=[TagName("keep"), TagName("new")])
        )
        cleared = await media_service.update_media(
            media.id, owner, MediaChanges(tags=[])
        )

        # Assert
        assert sorted(t.root for t in replaced.tags) == ["keep", "new"]
        assert cleared.tags == []

    @pytest.mark.asyncio
    async def test_update_by_other_member_forbidden(self, unit_env):
        """Only the uploader may edit."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        media = await upload_book(media_service, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await media_service.update_media(
                media.id, UserId(uuid4()), MediaChanges(title="Mine now")
            )

    @pytest.mark.asyncio
    async def test_update_deleted_media_is_invalid(self, unit_env):
        """Media in the trash must be restored before editing."""
        # Arrange
        media_service = await unit_env.get(MediaService)
        lifecycle = await unit_env.get(LifecycleService)
        owner = UserId(uuid4())
        media = await upload_book(media_service, owner)
        await lifecycle.soft_delete(media.id, owner)

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await media_service.update_media(
                media.id, owner, MediaChanges(title="Dune Messiah")
            )
