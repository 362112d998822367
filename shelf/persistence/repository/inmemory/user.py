"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from shelf.domain.model.user import User
from shelf.domain.repository.user import UserRepository
from shelf.domain.value import AuthProvider, Email, UserId

from .user_identity import InMemoryUserIdentityRepository


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Provider lookups go through the identity repository it shares state
    with, standing in for the SQL join.
    """

    def __init__(
        self, identity_repository: InMemoryUserIdentityRepository | None = None
    ) -> None:
        self._users: dict[UserId, User] = {}
        self._identity_repository = identity_repository

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by their external provider identity."""
        if self._identity_repository is None:
            return None
        identity = await self._identity_repository.find_by_provider(
            provider, provider_user_id
        )
        return self._users.get(identity.user_id) if identity else None

    async def save(self, user: User) -> User:
        """Save or update a user.

        Raises:
            IntegrityError: If another user already has the email
        """
        if user.email is not None:
            existing = await self.find_by_email(user.email)
            if existing and existing.id != user.id:
                raise IntegrityError("Duplicate email", None, Exception())
        self._users[user.id] = user
        return user
