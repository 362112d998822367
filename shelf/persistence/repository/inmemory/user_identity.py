"""In-memory user identity repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from shelf.domain.model.user_identity import UserIdentity
from shelf.domain.repository.user_identity import UserIdentityRepository
from shelf.domain.value import AuthProvider, UserId, UserIdentityId


class InMemoryUserIdentityRepository(UserIdentityRepository):
    """In-memory implementation of UserIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: dict[UserIdentityId, UserIdentity] = {}

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find identity by provider and provider-specific user ID."""
        for identity in self._identities.values():
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Get all identities for a user."""
        return [i for i in self._identities.values() if i.user_id == user_id]

    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Save identity.

        Raises:
            IntegrityError: If the provider account is linked to another identity
        """
        existing = await self.find_by_provider(
            identity.provider, identity.provider_user_id
        )
        if existing and existing.id != identity.id:
            raise IntegrityError("Duplicate provider identity", None, Exception())
        self._identities[identity.id] = identity
        return identity
