"""Domain value objects for Shelf.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from shelf.domain.value.common import RootValueObject, ValueObject
from shelf.domain.value.identifiers import InvitationId, MediaId


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    GITHUB = "github"


class MediaType(str, Enum):
    """Kind of library entry."""

    BOOK = "Book"
    MAGAZINE = "Magazine"
    PAPER = "Paper"
    ARTICLE = "Article"

    @classmethod
    def parse(cls, value: object, default: "MediaType | None" = None) -> "MediaType":
        """Parse a media type, falling back to a default for unknown values.

        Args:
            value: Raw value from a request payload
            default: Value used when ``value`` is missing or not recognised
                (Book when omitted)

        Returns:
            The matching media type or the default
        """
        fallback = default or cls.BOOK
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return fallback


class FileType(str, Enum):
    """Format of an attached media file."""

    EPUB = "epub"
    PDF = "pdf"

    @classmethod
    def from_content_type(cls, content_type: str | None) -> "FileType":
        """Map an upload content type to a file type.

        Anything that is not an EPUB is stored as PDF.
        """
        if content_type == "application/epub+zip":
            return cls.EPUB
        return cls.PDF


class InvitationStatus(str, Enum):
    """Derived status of an invitation (never stored)."""

    PENDING = "pending"
    USED = "used"
    EXPIRED = "expired"


class AccessOutcome(str, Enum):
    """Result of an access gate decision."""

    ADMIT = "admit"
    DENY = "deny"


class AdmissionPath(str, Enum):
    """Which rule of the access gate admitted a sign-in."""

    HANDOFF = "handoff"
    REGISTERED = "registered"
    EMAIL_INVITATION = "email_invitation"
    GENERAL_INVITATION = "general_invitation"


class Email(RootValueObject[str]):
    """Email address, normalised to lowercase without surrounding whitespace."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalise and sanity-check the address."""
        v = v.strip().lower()
        if not re.match(r"^[^@\s]+@[^@\s]+$", v):
            raise ValueError("Email must look like name@domain")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v


class TagName(RootValueObject[str]):
    """Tag name shared across the library.

    Free text, trimmed, 1-50 characters.
    Examples: 'science fiction', 'history', 'ml'
    """

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name length."""
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Tag name must be 1-50 characters")
        return v


class InvitationToken(RootValueObject[str]):
    """URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is non-empty and URL-safe."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        if not re.match(r"^[A-Za-z0-9_-]+$", v):
            raise ValueError("Token must be URL-safe")
        return v


class OAuthProviderInfo(ValueObject):
    """User info returned by an OAuth provider."""

    provider: AuthProvider
    provider_user_id: str  # Permanent account ID at the provider
    handle: str  # Login name at the provider
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None


class AccessCandidate(ValueObject):
    """Identity asking to be let in at sign-in completion."""

    email: Email | None = None
    is_registered: bool = False


class AccessDecision(ValueObject):
    """Outcome of the access gate for one sign-in."""

    outcome: AccessOutcome
    path: AdmissionPath | None = None
    invitation_id: InvitationId | None = None

    @property
    def admitted(self) -> bool:
        """Whether the sign-in may proceed."""
        return self.outcome == AccessOutcome.ADMIT


# Column widths of the media table
TITLE_MAX_LENGTH = 500
AUTHOR_MAX_LENGTH = 255
LANGUAGE_MAX_LENGTH = 50
DATE_MAX_LENGTH = 50


def _blank_to_none(v: object) -> object:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class MediaMetadata(ValueObject):
    """Metadata accepted when uploading a file.

    ``media_id`` set means the file is attached to existing media and the
    remaining fields are ignored. Unknown media types fall back to Book.
    ``tags`` accepts a list or a comma-separated string.
    """

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    author: str | None = Field(default=None, max_length=AUTHOR_MAX_LENGTH)
    description: str | None = None
    language: str | None = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)
    publication_date: str | None = Field(default=None, max_length=DATE_MAX_LENGTH)
    media_type: MediaType = MediaType.BOOK
    tags: list[TagName] = []
    media_id: MediaId | None = None

    @field_validator(
        "title", "author", "description", "language", "publication_date", mode="before"
    )
    @classmethod
    def strip_text(cls, v: object) -> object:
        """Treat blank strings as missing."""
        return _blank_to_none(v)

    @field_validator("media_type", mode="before")
    @classmethod
    def default_media_type(cls, v: object) -> MediaType:
        """Replace unknown media types with Book."""
        return MediaType.parse(v)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: object) -> list[str]:
        """Split comma-separated tags and drop blanks and duplicates."""
        return parse_tag_names(v)


def parse_tag_names(v: object) -> list[str]:
    """Normalise a tag payload into a list of distinct, non-empty names.

    Args:
        v: None, a comma-separated string, or a list of strings

    Returns:
        Tag names in first-seen order
    """
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    names: list[str] = []
    for raw in v:
        name = str(raw).strip()
        if name and name not in names:
            names.append(name)
    return names


class MediaChanges(ValueObject):
    """Owner edit of a media entry.

    Only fields present in the payload are applied. A blank title keeps the
    current one, an unknown media type keeps the current type, and ``tags``
    (when present) replaces the whole tag set.
    """

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    author: str | None = Field(default=None, max_length=AUTHOR_MAX_LENGTH)
    description: str | None = None
    language: str | None = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)
    publication_date: str | None = Field(default=None, max_length=DATE_MAX_LENGTH)
    media_type: str | None = None
    tags: list[TagName] | None = None

    @field_validator(
        "title", "author", "description", "language", "publication_date", mode="before"
    )
    @classmethod
    def strip_text(cls, v: object) -> object:
        """Treat blank strings as missing."""
        return _blank_to_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: object) -> list[str] | None:
        """Split comma-separated tags; None stays None."""
        if v is None:
            return None
        return parse_tag_names(v)
