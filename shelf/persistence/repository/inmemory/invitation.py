"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from shelf.domain.model.invitation import Invitation
from shelf.domain.repository.invitation import InvitationRepository
from shelf.domain.value import Email, InvitationId, InvitationToken, UserId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    ``mark_used`` checks and writes without awaiting in between, so it is
    atomic with respect to other coroutines on the same loop.
    """

    def __init__(self) -> None:
        self._invitations: list[Invitation] = []

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        for invitation in self._invitations:
            if invitation.id == invitation_id:
                return invitation
        return None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self._invitations:
            if invitation.token == token:
                return invitation
        return None

    def _oldest_consumable(self, now: datetime, email: Email | None):
        matches = [
            i
            for i in self._invitations
            if i.email == email and i.used_at is None and not i.is_expired(now)
        ]
        return min(matches, key=lambda i: i.created_at) if matches else None

    async def find_consumable_by_email(
        self, email: Email, now: datetime
    ) -> Optional[Invitation]:
        """Find the oldest consumable invitation scoped to ``email``."""
        return self._oldest_consumable(now, email)

    async def find_consumable_general(self, now: datetime) -> Optional[Invitation]:
        """Find the oldest consumable general invitation."""
        return self._oldest_consumable(now, None)

    async def mark_used(self, invitation_id: InvitationId, used_at: datetime) -> bool:
        """Set ``used_at`` if the invitation is unused and unexpired."""
        for i, invitation in enumerate(self._invitations):
            if invitation.id != invitation_id:
                continue
            if invitation.used_at is not None or invitation.is_expired(used_at):
                return False
            self._invitations[i] = invitation.model_copy(update={"used_at": used_at})
            return True
        return False

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: If the token is already taken
        """
        for i, existing in enumerate(self._invitations):
            if existing.id == invitation.id:
                self._invitations[i] = invitation
                return invitation

        if await self.find_by_token(invitation.token):
            raise IntegrityError("Duplicate invitation token", None, Exception())

        self._invitations.append(invitation)
        return invitation

    async def find_by_creator(
        self, created_by: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invitation]:
        """Find invitations created by a user, newest first."""
        matches = [i for i in self._invitations if i.created_by == created_by]
        matches.sort(key=lambda i: i.created_at, reverse=True)
        return matches[offset : offset + limit]
