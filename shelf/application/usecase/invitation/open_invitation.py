"""Open invitation link use case."""

from pydantic import BaseModel, ValidationError

from shelf.domain.service import HandoffService, InvitationService
from shelf.domain.value import InvitationToken


class OpenInvitationRequest(BaseModel):
    """Invitation link opened in a browser."""

    token: str


class OpenInvitationResponse(BaseModel):
    """Handoff to carry through the sign-in redirect.

    ``handoff`` is None when the invitation is unknown, used or expired.
    """

    handoff: str | None
    max_age: int


class OpenInvitationUseCase:
    """Use case for turning an invitation link into a handoff cookie."""

    def __init__(
        self, invitation_service: InvitationService, handoff_service: HandoffService
    ) -> None:
        """Initialize open invitation use case.

        Args:
            invitation_service: Invitation domain service
            handoff_service: Signs the handoff token
        """
        self.invitation_service = invitation_service
        self.handoff_service = handoff_service

    async def execute(self, request: OpenInvitationRequest) -> OpenInvitationResponse:
        """Execute open invitation flow.

        The email scope is not checked here; it is enforced at sign-in.

        Args:
            request: Token from the invitation link

        Returns:
            Signed handoff token, or None if the invitation is not consumable
        """
        max_age = self.handoff_service.ttl_seconds
        try:
            token = InvitationToken(request.token)
        except ValidationError:
            return OpenInvitationResponse(handoff=None, max_age=max_age)

        invitation = await self.invitation_service.get_consumable(token)
        if invitation is None:
            return OpenInvitationResponse(handoff=None, max_age=max_age)

        return OpenInvitationResponse(
            handoff=self.handoff_service.issue(invitation.token), max_age=max_age
        )
