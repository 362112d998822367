"""Mock persistence providers for testing."""

from dishka import Scope, provide

from shelf.domain.repository import (
    CollectionRepository,
    InvitationRepository,
    MediaRepository,
    TagRepository,
    UnitOfWork,
    UserIdentityRepository,
    UserRepository,
)
from shelf.persistence.repository.inmemory import (
    InMemoryCollectionRepository,
    InMemoryInvitationRepository,
    InMemoryMediaRepository,
    InMemoryTagRepository,
    InMemoryUnitOfWork,
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)
from shelf.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across the requests of
    one container (route tests make several calls). Each test builds its
    own container, which keeps tests isolated.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_inmemory_identities(self) -> InMemoryUserIdentityRepository:
        """Shared identity store, also read by the user repository."""
        return InMemoryUserIdentityRepository()

    @provide
    def get_inmemory_tags(self) -> InMemoryTagRepository:
        """Shared tag store, also read by the media repository."""
        return InMemoryTagRepository()

    @provide
    def get_user_identity_repository(
        self, identities: InMemoryUserIdentityRepository
    ) -> UserIdentityRepository:
        """Provide in-memory user identity repository."""
        return identities

    @provide
    def get_user_repository(
        self, identities: InMemoryUserIdentityRepository
    ) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(identity_repository=identities)

    @provide
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide
    def get_tag_repository(self, tags: InMemoryTagRepository) -> TagRepository:
        """Provide in-memory tag repository."""
        return tags

    @provide
    def get_media_repository(self, tags: InMemoryTagRepository) -> MediaRepository:
        """Provide in-memory media repository."""
        return InMemoryMediaRepository(tag_repository=tags)

    @provide
    def get_collection_repository(self) -> CollectionRepository:
        """Provide in-memory collection repository."""
        return InMemoryCollectionRepository()

    @provide
    def get_inmemory_unit_of_work(self) -> InMemoryUnitOfWork:
        """Shared unit of work, so tests can count commits."""
        return InMemoryUnitOfWork()

    @provide
    def get_unit_of_work(self, unit_of_work: InMemoryUnitOfWork) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return unit_of_work
