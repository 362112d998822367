"""Route tests for /media, /collections and /tags."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from shelf.config import Settings
from shelf.domain.service import JWTService
from shelf.interface.api.app import create_app
from tests.di import build_test_container

EPUB = "application/epub+zip"


@pytest.fixture
def app():
    """App backed by a fresh all-mock container."""
    return create_app(build_test_container())


def member(app) -> TestClient:
    """A client signed in as a fresh member id."""
    client = TestClient(app)
    token = JWTService(Settings().auth).create_token(user_id=str(uuid4()), email=None)
    client.cookies.set("auth_token", token)
    return client


def upload(client: TestClient, **body) -> dict:
    body.setdefault("blob_url", f"https://blob.example.com/{uuid4()}.epub")
    body.setdefault("content_type", EPUB)
    body.setdefault("title", "Dune")
    response = client.post("/media", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestMediaRoutes:
    """Tests for the media endpoints."""

    def test_upload_and_fetch(self, app):
        """Uploaded media is listed and fetchable by anyone."""
        # Arrange
        owner = member(app)
        anonymous = TestClient(app)

        # Act
        created = upload(owner, tags="sci-fi, classic", media_type="Paper")
        listed = anonymous.get("/media")
        fetched = anonymous.get(f"/media/{created['id']}")

        # Assert
        assert created["media_type"] == "Paper"
        assert sorted(created["tags"]) == ["classic", "sci-fi"]
        assert [m["id"] for m in listed.json()["media"]] == [created["id"]]
        assert fetched.status_code == 200
        assert fetched.json()["files"][0]["file_type"] == "epub"

    def test_upload_requires_session(self, app):
        """Anonymous uploads are rejected."""
        # Arrange
        client = TestClient(app)

        # Act
        response = client.post(
            "/media", json={"blob_url": "https://blob.example.com/x.epub"}
        )

        # Assert
        assert response.status_code == 401

    def test_second_file_of_same_format_conflicts(self, app):
        """One file per format: EPUB twice is 409, then a PDF is accepted."""
        # Arrange
        owner = member(app)
        created = upload(owner)

        # Act
        duplicate = owner.post(
            "/media",
            json={
                "blob_url": "https://blob.example.com/again.epub",
                "content_type": EPUB,
                "media_id": created["id"],
            },
        )
        pdf = owner.post(
            "/media",
            json={
                "blob_url": "https://blob.example.com/dune.pdf",
                "content_type": "application/pdf",
                "media_id": created["id"],
            },
        )

        # Assert
        assert duplicate.status_code == 409
        assert duplicate.json()["error"] == "conflict"
        assert pdf.status_code == 201
        assert {f["file_type"] for f in pdf.json()["files"]} == {"epub", "pdf"}

    def test_missing_title_rejected(self, app):
        """New media needs a title."""
        # Arrange
        owner = member(app)

        # Act
        response = owner.post(
            "/media",
            json={"blob_url": "https://blob.example.com/x.epub", "content_type": EPUB},
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_overlong_title_rejected_on_upload(self, app):
        """Titles wider than the column are a 400, not a server error."""
        # Arrange
        owner = member(app)

        # Act
        response = owner.post(
            "/media",
            json={
                "blob_url": "https://blob.example.com/x.epub",
                "content_type": EPUB,
                "title": "x" * 501,
            },
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.parametrize(
        "field, value",
        [("title", "x" * 501), ("author", "a" * 256), ("language", "l" * 51)],
    )
    def test_overlong_fields_rejected_on_update(self, app, field, value):
        """Edits are held to the same widths and leave the media unchanged."""
        # Arrange
        owner = member(app)
        created = upload(owner)

        # Act
        response = owner.put(f"/media/{created['id']}", json={field: value})

        # Assert
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert owner.get(f"/media/{created['id']}").json()["title"] == "Dune"

    def test_update_only_sent_fields(self, app):
        """PUT applies the fields present in the body."""
        # Arrange
        owner = member(app)
        created = upload(owner, author="Frank Herbert")

        # Act
        response = owner.put(
            f"/media/{created['id']}", json={"description": "Desert planet"}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["author"] == "Frank Herbert"
        assert body["description"] == "Desert planet"

    def test_update_by_other_member_forbidden(self, app):
        """Only the uploader may edit."""
        # Arrange
        created = upload(member(app))
        other = member(app)

        # Act
        response = other.put(f"/media/{created['id']}", json={"title": "Mine"})

        # Assert
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_delete_restore_cycle(self, app):
        """Trash hides media from others and restore brings it back."""
        # Arrange
        owner = member(app)
        anonymous = TestClient(app)
        created = upload(owner)
        media_url = f"/media/{created['id']}"

        # Act
        deleted = owner.delete(media_url)
        deleted_again = owner.delete(media_url)
        hidden = anonymous.get(media_url)
        trash = owner.get("/media/deleted")
        restored = owner.post(f"{media_url}/restore")
        restored_again = owner.post(f"{media_url}/restore")
        visible = anonymous.get(media_url)

        # Assert
        assert deleted.status_code == 200
        assert "purge_after" in deleted.json()
        assert deleted_again.status_code == 404
        assert hidden.status_code == 404
        assert [m["id"] for m in trash.json()["media"]] == [created["id"]]
        assert trash.json()["media"][0]["days_remaining"] == 7
        assert restored.status_code == 200
        assert restored.json()["deleted_at"] is None
        assert restored_again.status_code == 409
        assert restored_again.json()["error"] == "invalid_state"
        assert visible.status_code == 200

    def test_cleanup_keeps_fresh_trash(self, app):
        """A manual sweep leaves media inside its grace window alone."""
        # Arrange
        owner = member(app)
        created = upload(owner)
        owner.delete(f"/media/{created['id']}")

        # Act
        response = owner.post("/media/cleanup")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"purged_count": 0}
        assert owner.get(f"/media/{created['id']}").status_code == 200

    def test_unknown_media(self, app):
        """Unknown ids are 404."""
        # Arrange
        client = TestClient(app)

        # Act
        response = client.get(f"/media/{uuid4()}")

        # Assert
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestCollectionRoutes:
    """Tests for the collection endpoints."""

    def test_collection_lifecycle(self, app):
        """Create, fill, read, empty and delete a collection."""
        # Arrange
        owner = member(app)
        media = upload(owner)

        # Act
        created = owner.post("/collections", json={"name": "Favourites"})
        collection_url = f"/collections/{created.json()['id']}"
        added = owner.post(f"{collection_url}/media", json={"media_id": media["id"]})
        fetched = owner.get(collection_url)
        removed = owner.delete(f"{collection_url}/media/{media['id']}")
        emptied = owner.get(collection_url)
        deleted = owner.delete(collection_url)
        gone = owner.get(collection_url)

        # Assert
        assert created.status_code == 201
        assert added.status_code in (200, 201)
        assert [m["id"] for m in fetched.json()["media"]] == [media["id"]]
        assert removed.status_code == 204
        assert emptied.json()["media"] == []
        assert deleted.status_code == 204
        assert gone.status_code == 404

    def test_duplicate_name_conflicts(self, app):
        """Names are unique per owner."""
        # Arrange
        owner = member(app)
        owner.post("/collections", json={"name": "Favourites"})

        # Act
        response = owner.post("/collections", json={"name": "Favourites"})

        # Assert
        assert response.status_code == 409

    def test_foreign_collection_forbidden(self, app):
        """Other members cannot read someone else's collection."""
        # Arrange
        owner = member(app)
        created = owner.post("/collections", json={"name": "Private"}).json()

        # Act
        response = member(app).get(f"/collections/{created['id']}")

        # Assert
        assert response.status_code == 403


class TestTagRoutes:
    """Tests for the tag listing."""

    def test_tags_created_on_upload(self, app):
        """Tags used by uploads are listed by name."""
        # Arrange
        owner = member(app)
        upload(owner, tags=["zoology", "art"])

        # Act
        response = TestClient(app).get("/tags")

        # Assert
        assert response.status_code == 200
        assert [t["name"] for t in response.json()["tags"]] == ["art", "zoology"]
