"""Domain model entities for Shelf."""

from shelf.domain.model.collection import Collection
from shelf.domain.model.invitation import Invitation
from shelf.domain.model.media import Media, MediaFile
from shelf.domain.model.tag import Tag
from shelf.domain.model.user import User
from shelf.domain.model.user_identity import UserIdentity

__all__ = [
    "User",
    "UserIdentity",
    "Invitation",
    "Media",
    "MediaFile",
    "Tag",
    "Collection",
]
