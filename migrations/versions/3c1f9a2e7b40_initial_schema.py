"""initial_schema

Create the schema for Shelf:
- Users and their GitHub identities
- Invitations (single-use, optionally scoped to one email)
- Media with one file per format, soft delete via deleted_at
- Tags and the media_tags junction
- Collections and the collection_media junction

Revision ID: 3c1f9a2e7b40
Revises:
Create Date: 2026-10-18 09:12:44.512031

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2e7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=True),  # Lowercased
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # USER_IDENTITIES table
    # ========================================================================
    op.create_table(
        "user_identities",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),  # 'github'
        sa.Column("provider_user_id", sa.String(255), nullable=False),
        sa.Column("provider_handle", sa.String(255), nullable=False),
        sa.Column("provider_email", sa.String(255), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.Column("last_login_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "provider_user_id", name="uq_provider_identity"
        ),
    )
    op.create_index("idx_user_identities_user_id", "user_identities", ["user_id"])

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        _id_column(),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),  # NULL = general
        sa.Column("created_by", sa.UUID(), nullable=False),
        _timestamp_column("created_at"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("used_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_invitations_token"),
    )
    op.create_index("idx_invitations_email", "invitations", ["email"])
    op.create_index(
        "idx_invitations_created_by",
        "invitations",
        ["created_by", sa.text("created_at DESC")],
    )

    # ========================================================================
    # MEDIA table
    # ========================================================================
    op.create_table(
        "media",
        _id_column(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("language", sa.String(50), nullable=True),
        sa.Column("publication_date", sa.String(50), nullable=True),
        sa.Column(
            "media_type", sa.String(20), nullable=False, server_default="Book"
        ),
        sa.Column("cover_url", sa.Text(), nullable=True),
        sa.Column("uploaded_by", sa.UUID(), nullable=False),
        _timestamp_column("uploaded_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_media_uploaded_at", "media", [sa.text("uploaded_at DESC")]
    )
    op.create_index("idx_media_uploaded_by", "media", ["uploaded_by"])
    # Purge sweeper scans only trashed rows
    op.create_index(
        "idx_media_deleted_at",
        "media",
        ["deleted_at"],
        postgresql_where=sa.text("deleted_at IS NOT NULL"),
    )

    # ========================================================================
    # MEDIA_FILES table
    # ========================================================================
    op.create_table(
        "media_files",
        _id_column(),
        sa.Column("media_id", sa.UUID(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(10), nullable=False),  # 'epub' | 'pdf'
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("media_id", "file_type", name="uq_media_file_type"),
    )

    # ========================================================================
    # TAGS and MEDIA_TAGS tables
    # ========================================================================
    op.create_table(
        "tags",
        _id_column(),
        sa.Column("name", sa.String(50), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_tag_name"),
    )

    op.create_table(
        "media_tags",
        sa.Column("media_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"]),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("media_id", "tag_id"),
    )
    op.create_index("idx_media_tags_tag_id", "media_tags", ["tag_id"])

    # ========================================================================
    # COLLECTIONS and COLLECTION_MEDIA tables
    # ========================================================================
    op.create_table(
        "collections",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "name", name="uq_collection_owner_name"),
    )

    op.create_table(
        "collection_media",
        sa.Column("collection_id", sa.UUID(), nullable=False),
        sa.Column("media_id", sa.UUID(), nullable=False),
        _timestamp_column("added_at"),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"]),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("collection_id", "media_id"),
    )
    op.create_index(
        "idx_collection_media_media_id", "collection_media", ["media_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("collection_media")
    op.drop_table("collections")
    op.drop_table("media_tags")
    op.drop_table("tags")
    op.drop_table("media_files")
    op.drop_table("media")
    op.drop_table("invitations")
    op.drop_table("user_identities")
    op.drop_table("users")
