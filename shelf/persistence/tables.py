"""SQLAlchemy table definitions for Shelf.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (Provider-agnostic)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=True, unique=True),  # Lowercased
    Column("display_name", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USER IDENTITIES TABLE (Provider accounts linked to users)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'github'
    Column("provider_user_id", String(255), nullable=False),  # Numeric account ID
    Column("provider_handle", String(255), nullable=False),  # Login name
    Column("provider_email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("token", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=True),  # NULL = general invitation
    Column(
        "created_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),  # Set once
)

Index("idx_invitations_email", invitations_table.c.email)
Index(
    "idx_invitations_created_by",
    invitations_table.c.created_by,
    invitations_table.c.created_at.desc(),
)

# ============================================================================
# MEDIA TABLE
# ============================================================================
media_table = Table(
    "media",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(500), nullable=False),
    Column("author", String(255), nullable=True),
    Column("description", Text, nullable=True),
    Column("language", String(50), nullable=True),
    Column("publication_date", String(50), nullable=True),  # Free-form, e.g. '1999'
    Column("media_type", String(20), nullable=False, server_default="Book"),
    Column("cover_url", Text, nullable=True),
    Column(
        "uploaded_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "uploaded_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),  # NULL = active
)

Index("idx_media_uploaded_at", media_table.c.uploaded_at.desc())
Index("idx_media_uploaded_by", media_table.c.uploaded_by)
Index(
    "idx_media_deleted_at",
    media_table.c.deleted_at,
    postgresql_where=text("deleted_at IS NOT NULL"),
)

# ============================================================================
# MEDIA FILES TABLE (one file per format)
# ============================================================================
media_files_table = Table(
    "media_files",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("media_id", UUID, ForeignKey("media.id"), nullable=False),
    Column("file_url", Text, nullable=False),
    Column("file_type", String(10), nullable=False),  # 'epub' or 'pdf'
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("media_id", "file_type", name="uq_media_file_type"),
)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# MEDIA_TAGS TABLE (junction table for many-to-many relationship)
# ============================================================================
media_tags_table = Table(
    "media_tags",
    metadata,
    Column("media_id", UUID, ForeignKey("media.id"), primary_key=True),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="RESTRICT"), primary_key=True),
)

Index("idx_media_tags_tag_id", media_tags_table.c.tag_id)

# ============================================================================
# COLLECTIONS TABLE
# ============================================================================
collections_table = Table(
    "collections",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "name", name="uq_collection_owner_name"),
)

# ============================================================================
# COLLECTION_MEDIA TABLE (junction table)
# ============================================================================
collection_media_table = Table(
    "collection_media",
    metadata,
    Column("collection_id", UUID, ForeignKey("collections.id"), primary_key=True),
    Column("media_id", UUID, ForeignKey("media.id"), primary_key=True),
    Column(
        "added_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_collection_media_media_id", collection_media_table.c.media_id)
