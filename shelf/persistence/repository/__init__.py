"""PostgreSQL repository implementations."""

from shelf.persistence.repository.collection import PostgresCollectionRepository
from shelf.persistence.repository.invitation import PostgresInvitationRepository
from shelf.persistence.repository.media import PostgresMediaRepository
from shelf.persistence.repository.tag import PostgresTagRepository
from shelf.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork
from shelf.persistence.repository.user import PostgresUserRepository
from shelf.persistence.repository.user_identity import PostgresUserIdentityRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresUserIdentityRepository",
    "PostgresInvitationRepository",
    "PostgresMediaRepository",
    "PostgresTagRepository",
    "PostgresCollectionRepository",
    "SqlAlchemyUnitOfWork",
]
