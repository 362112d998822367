"""Domain value objects for Shelf."""

from shelf.domain.value.identifiers import (
    CollectionId,
    InvitationId,
    MediaFileId,
    MediaId,
    TagId,
    UserId,
    UserIdentityId,
)
from shelf.domain.value.types import (
    AccessCandidate,
    AccessDecision,
    AccessOutcome,
    AdmissionPath,
    AuthProvider,
    Email,
    FileType,
    InvitationStatus,
    InvitationToken,
    MediaChanges,
    MediaMetadata,
    MediaType,
    OAuthProviderInfo,
    TagName,
    parse_tag_names,
)

__all__ = [
    # Identifiers
    "UserId",
    "UserIdentityId",
    "InvitationId",
    "MediaId",
    "MediaFileId",
    "TagId",
    "CollectionId",
    # Types
    "AccessCandidate",
    "AccessDecision",
    "AccessOutcome",
    "AdmissionPath",
    "AuthProvider",
    "Email",
    "FileType",
    "InvitationStatus",
    "InvitationToken",
    "MediaChanges",
    "MediaMetadata",
    "MediaType",
    "OAuthProviderInfo",
    "TagName",
    "parse_tag_names",
]
