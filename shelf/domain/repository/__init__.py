"""Repository interfaces for the Shelf domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from shelf.domain.repository.collection import CollectionRepository
from shelf.domain.repository.invitation import InvitationRepository
from shelf.domain.repository.media import MediaRepository
from shelf.domain.repository.tag import TagRepository
from shelf.domain.repository.unit_of_work import UnitOfWork
from shelf.domain.repository.user import UserRepository
from shelf.domain.repository.user_identity import UserIdentityRepository

__all__ = [
    "CollectionRepository",
    "InvitationRepository",
    "MediaRepository",
    "TagRepository",
    "UnitOfWork",
    "UserIdentityRepository",
    "UserRepository",
]
