"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from shelf.domain.model.invitation import Invitation
from shelf.domain.value import Email, InvitationId, InvitationToken, UserId


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Consumption goes through ``mark_used`` only, which must be a single
    conditional write so two racing sign-ins cannot both consume the same
    invitation.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by token.

        Used when an invitation link is opened and at sign-in completion.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_consumable_by_email(
        self, email: Email, now: datetime
    ) -> Optional[Invitation]:
        """Find an unused, unexpired invitation scoped to an email.

        Args:
            email: Candidate email
            now: Current time for the expiry check

        Returns:
            The oldest matching invitation, None if there is none
        """
        pass

    @abstractmethod
    async def find_consumable_general(self, now: datetime) -> Optional[Invitation]:
        """Find an unused, unexpired invitation with no email scope.

        Args:
            now: Current time for the expiry check

        Returns:
            The oldest matching invitation, None if there is none
        """
        pass

    @abstractmethod
    async def mark_used(self, invitation_id: InvitationId, used_at: datetime) -> bool:
        """Consume an invitation if it is still unused and unexpired.

        Implemented as a conditional update guarded by ``used_at IS NULL``
        and ``expires_at >= used_at``.

        Args:
            invitation_id: Invitation to consume
            used_at: Consumption time

        Returns:
            True if this call consumed it, False if it was already used,
            expired or missing
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            IntegrityError: If the token already exists
        """
        pass

    @abstractmethod
    async def find_by_creator(
        self, created_by: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invitation]:
        """Find invitations created by a user, newest first.

        Args:
            created_by: Creator's user ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass
