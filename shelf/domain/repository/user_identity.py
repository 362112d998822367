"""User identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from shelf.domain.model.user_identity import UserIdentity
from shelf.domain.value import AuthProvider, UserId


class UserIdentityRepository(ABC):
    """Repository for provider accounts linked to users."""

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find an identity by provider account.

        Args:
            provider: Authentication provider
            provider_user_id: Permanent account ID at the provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Find every identity linked to a user.

        Args:
            user_id: The user's ID

        Returns:
            Linked identities
        """
        pass

    @abstractmethod
    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Save an identity (create or update).

        Args:
            identity: The identity to save

        Returns:
            The saved identity
        """
        pass
