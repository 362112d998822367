"""Strongly typed identifiers for Shelf domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
UserIdentityId = NewType("UserIdentityId", UUID)
InvitationId = NewType("InvitationId", UUID)
MediaId = NewType("MediaId", UUID)
MediaFileId = NewType("MediaFileId", UUID)
TagId = NewType("TagId", UUID)
CollectionId = NewType("CollectionId", UUID)
