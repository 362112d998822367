"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model import Invitation
from shelf.domain.repository import InvitationRepository
from shelf.domain.value import Email, InvitationId, InvitationToken, UserId
from shelf.persistence.mappers import invitation_to_dict, row_to_invitation
from shelf.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    def _consumable(self, now: datetime):
        return and_(
            invitations_table.c.used_at.is_(None),
            invitations_table.c.expires_at >= now,
        )

    async def find_consumable_by_email(
        self, email: Email, now: datetime
    ) -> Optional[Invitation]:
        """Find the oldest consumable invitation scoped to ``email``."""
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.email == email.root,
                    self._consumable(now),
                )
            )
            .order_by(invitations_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_consumable_general(self, now: datetime) -> Optional[Invitation]:
        """Find the oldest consumable invitation without an email scope."""
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.email.is_(None),
                    self._consumable(now),
                )
            )
            .order_by(invitations_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def mark_used(self, invitation_id: InvitationId, used_at: datetime) -> bool:
        """Consume an invitation with a single guarded UPDATE.

        Concurrent callers serialise on the row lock; the loser re-evaluates
        ``used_at IS NULL`` after the winner commits and updates nothing.
        """
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    self._consumable(used_at),
                )
            )
            .values(used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: Invitation to save

        Returns:
            Saved invitation
        """
        invitation_dict = invitation_to_dict(invitation)

        existing = await self.find_by_id(invitation.id)

        if existing:
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**invitation_dict)
            )
        else:
            stmt = insert(invitations_table).values(**invitation_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return invitation

    async def find_by_creator(
        self, created_by: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invitation]:
        """Find invitations created by a user, newest first."""
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.created_by == created_by)
            .order_by(invitations_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]
