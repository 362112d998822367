"""In-memory repository implementations for testing."""

from .collection import InMemoryCollectionRepository
from .invitation import InMemoryInvitationRepository
from .media import InMemoryMediaRepository
from .tag import InMemoryTagRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .user_identity import InMemoryUserIdentityRepository

__all__ = [
    "InMemoryCollectionRepository",
    "InMemoryInvitationRepository",
    "InMemoryMediaRepository",
    "InMemoryTagRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryUserIdentityRepository",
]
