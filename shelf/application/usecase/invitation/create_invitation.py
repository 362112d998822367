"""Create invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shelf.application.usecase.base import BaseUseCase
from shelf.config import Settings
from shelf.domain.error import ValidationError
from shelf.domain.service import EmailService, InvitationService
from shelf.domain.value import Email, UserId


class CreateInvitationRequest(BaseModel):
    """Create invitation request."""

    user_id: str  # Member issuing the invitation
    email: str | None = None  # Restrict to this address; None for general
    expires_in_days: int = 7


class CreateInvitationResponse(BaseModel):
    """Create invitation response."""

    id: str
    token: str
    email: str | None
    invite_link: str
    created_at: datetime
    expires_at: datetime
    email_sent: bool


class CreateInvitationUseCase(
    BaseUseCase[CreateInvitationRequest, CreateInvitationResponse]
):
    """Use case for issuing an invitation and emailing its link."""

    def __init__(
        self,
        invitation_service: InvitationService,
        email_service: EmailService,
        settings: Settings,
    ) -> None:
        """Initialize create invitation use case.

        Args:
            invitation_service: Invitation domain service
            email_service: Email domain service
            settings: Application settings (base URL for links)
        """
        self.invitation_service = invitation_service
        self.email_service = email_service
        self.settings = settings

    async def execute(self, request: CreateInvitationRequest) -> CreateInvitationResponse:
        """Execute create invitation flow.

        The email is sent only for scoped invitations and only when mail is
        configured. A failed send does not undo the invitation.

        Args:
            request: Create invitation request

        Returns:
            The invitation with its shareable link

        Raises:
            ValidationError: If ``expires_in_days`` is out of range
            ConflictError: If ``email`` already belongs to a member
        """
        try:
            email = Email(request.email) if request.email else None
        except PydanticValidationError:
            raise ValidationError(f"Invalid email address: {request.email}")

        invitation = await self.invitation_service.create_invitation(
            created_by=UserId(UUID(request.user_id)),
            email=email,
            expires_in_days=request.expires_in_days,
        )
        invite_link = f"{self.settings.api.base_url}/invite/{invitation.token.root}"

        email_sent = False
        if email is not None:
            if self.email_service.validate_email_config():
                email_sent = await self.email_service.send_invitation_email(
                    email.root, invite_link, invitation.expires_at
                )
            else:
                logfire.warn(
                    "Email not configured, invitation link must be shared manually",
                    invitation_id=str(invitation.id),
                )

        return CreateInvitationResponse(
            id=str(invitation.id),
            token=invitation.token.root,
            email=email.root if email else None,
            invite_link=invite_link,
            created_at=invitation.created_at,
            expires_at=invitation.expires_at,
            email_sent=email_sent,
        )
