"""Invitation domain service."""

import secrets
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from shelf.domain.error import ConflictError, ValidationError
from shelf.domain.model.common import utcnow
from shelf.domain.model.invitation import Invitation
from shelf.domain.repository import InvitationRepository, UserRepository
from shelf.domain.value import Email, InvitationId, InvitationToken, UserId

from .base import Service

# 32 random bytes, 43 URL-safe characters
TOKEN_BYTES = 32


def _masked(token: InvitationToken) -> str:
    return token.root[:8] + "..."


class InvitationService(Service):
    """Domain service for issuing, checking and consuming invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        max_expiry_days: int = 365,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            user_repository: User repository, for the already-registered check
            max_expiry_days: Upper bound accepted for ``expires_in_days``
        """
        self.invitation_repository = invitation_repository
        self.user_repository = user_repository
        self.max_expiry_days = max_expiry_days

    async def create_invitation(
        self,
        created_by: UserId,
        email: Email | None = None,
        expires_in_days: int = 7,
        now: datetime | None = None,
    ) -> Invitation:
        """Issue a new invitation.

        Args:
            created_by: Member issuing the invitation
            email: Restrict the invitation to this address (None for general)
            expires_in_days: Lifetime in days
            now: Issue time

        Returns:
            Created invitation

        Raises:
            ValidationError: If ``expires_in_days`` is out of range
            ConflictError: If a user already owns ``email``
        """
        now = now or utcnow()
        with logfire.span(
            "invitation_service.create_invitation",
            created_by=str(created_by),
            email=email.root if email else None,
            expires_in_days=expires_in_days,
        ):
            if expires_in_days < 1 or expires_in_days > self.max_expiry_days:
                raise ValidationError(
                    f"expires_in_days must be between 1 and {self.max_expiry_days}"
                )

            if email is not None:
                existing = await self.user_repository.find_by_email(email)
                if existing:
                    logfire.warn("Invitation for registered email", email=email.root)
                    raise ConflictError(f"User already exists: {email.root}")

            invitation = Invitation(
                id=InvitationId(uuid4()),
                token=InvitationToken(secrets.token_urlsafe(TOKEN_BYTES)),
                email=email,
                created_by=created_by,
                created_at=now,
                expires_at=now + timedelta(days=expires_in_days),
                used_at=None,
            )

            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                created_by=str(created_by),
                general=email is None,
            )
            return saved

    async def get_consumable(
        self, token: InvitationToken, now: datetime | None = None
    ) -> Invitation | None:
        """Get an invitation by token if it can still be consumed.

        The email scope is not checked here; the candidate is not known yet
        when the invitation link is opened.

        Args:
            token: Invitation token
            now: Current time

        Returns:
            The invitation if unused and unexpired, None otherwise
        """
        now = now or utcnow()
        with logfire.span(
            "invitation_service.get_consumable", token=_masked(token)
        ):
            invitation = await self.invitation_repository.find_by_token(token)
            if not invitation:
                logfire.warn("Invitation not found", token=_masked(token))
                return None
            if invitation.used_at is not None or invitation.is_expired(now):
                logfire.warn(
                    "Invitation not consumable",
                    invitation_id=str(invitation.id),
                    status=invitation.status(now).value,
                )
                return None
            return invitation

    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Get invitation by token.

        Args:
            token: Invitation token

        Returns:
            Invitation if found, None otherwise
        """
        with logfire.span("invitation_service.find_by_token", token=_masked(token)):
            return await self.invitation_repository.find_by_token(token)

    async def find_fallback(
        self, email: Email, now: datetime | None = None
    ) -> list[Invitation]:
        """Find invitations usable without a handoff token.

        Args:
            email: Candidate email
            now: Current time

        Returns:
            The email-scoped match followed by the general match, each if any
        """
        now = now or utcnow()
        with logfire.span("invitation_service.find_fallback", email=email.root):
            found = []
            scoped = await self.invitation_repository.find_consumable_by_email(
                email, now
            )
            if scoped:
                found.append(scoped)
            general = await self.invitation_repository.find_consumable_general(now)
            if general:
                found.append(general)
            return found

    async def consume(self, invitation: Invitation, now: datetime | None = None) -> bool:
        """Mark an invitation as used.

        Args:
            invitation: Invitation to consume
            now: Consumption time

        Returns:
            True if this call consumed it, False if another sign-in won
            the race or it expired meanwhile
        """
        now = now or utcnow()
        with logfire.span(
            "invitation_service.consume", invitation_id=str(invitation.id)
        ):
            consumed = await self.invitation_repository.mark_used(invitation.id, now)
            if consumed:
                logfire.info("Invitation consumed", invitation_id=str(invitation.id))
            else:
                logfire.warn(
                    "Invitation already consumed", invitation_id=str(invitation.id)
                )
            return consumed

    async def list_invitations(
        self, created_by: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invitation]:
        """List invitations created by a user, newest first.

        Args:
            created_by: Creator's user ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        with logfire.span(
            "invitation_service.list_invitations",
            created_by=str(created_by),
            limit=limit,
            offset=offset,
        ):
            invitations = await self.invitation_repository.find_by_creator(
                created_by, limit, offset
            )
            logfire.info(
                "Invitations listed", created_by=str(created_by), count=len(invitations)
            )
            return invitations
