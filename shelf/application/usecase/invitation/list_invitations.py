"""List invitations use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from shelf.domain.model.common import utcnow
from shelf.domain.service import InvitationService
from shelf.domain.value import InvitationStatus, UserId


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    user_id: str
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class InvitationItem(BaseModel):
    """Invitation in a listing."""

    id: str
    token: str
    email: str | None
    status: InvitationStatus
    created_at: datetime
    expires_at: datetime
    used_at: datetime | None


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[InvitationItem]


class ListInvitationsUseCase:
    """Use case for listing invitations issued by the caller."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize list invitations use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations flow.

        Args:
            request: List invitations request

        Returns:
            Invitations newest first, each with its derived status
        """
        now = utcnow()
        invitations = await self.invitation_service.list_invitations(
            UserId(UUID(request.user_id)), request.limit, request.offset
        )
        return ListInvitationsResponse(
            invitations=[
                InvitationItem(
                    id=str(invitation.id),
                    token=invitation.token.root,
                    email=invitation.email.root if invitation.email else None,
                    status=invitation.status(now),
                    created_at=invitation.created_at,
                    expires_at=invitation.expires_at,
                    used_at=invitation.used_at,
                )
                for invitation in invitations
            ]
        )
