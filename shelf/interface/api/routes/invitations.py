"""Invitation routes."""

import logging
from urllib.parse import quote

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from shelf.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    OpenInvitationRequest,
    OpenInvitationUseCase,
)
from shelf.config import Settings
from shelf.domain.service import JWTService
from shelf.interface.api.routes.cookies import set_handoff_cookie

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/invitations", tags=["invitations"], route_class=DishkaRoute
)

# Public invitation links live outside the API prefix
invite_router = APIRouter(prefix="/invite", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for creating an invitation."""

    email: str | None = None
    expires_in_days: int = 7


@router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInvitationResponse:
    """Create an invitation, optionally scoped to one email address.

    Scoped invitations are emailed when SMTP is configured; the link is
    returned either way.
    """
    user_id = jwt_service.require_user_id(auth_token)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(
            user_id=str(user_id),
            email=request.email,
            expires_in_days=request.expires_in_days,
        )
    )


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitationsResponse:
    """List invitations created by the current user, newest first."""
    user_id = jwt_service.require_user_id(auth_token)
    return await list_invitations_use_case.execute(
        ListInvitationsRequest(user_id=str(user_id), limit=limit, offset=offset)
    )


@invite_router.get("/{token}")
async def open_invitation(
    token: str,
    open_invitation_use_case: FromDishka[OpenInvitationUseCase],
    settings: FromDishka[Settings],
):
    """Open an invitation link.

    A consumable invitation sets the handoff cookie and sends the visitor to
    sign in. Anything else lands on the frontend's invitation page, which
    explains that the link is invalid, used or expired.
    """
    frontend_url = settings.api.frontend_url
    response = await open_invitation_use_case.execute(OpenInvitationRequest(token=token))

    if response.handoff is None:
        logger.info("Invitation link not usable, redirecting to invite page")
        return RedirectResponse(
            url=f"{frontend_url}/invite/{quote(token, safe='')}",
            status_code=status.HTTP_302_FOUND,
        )

    redirect = RedirectResponse(
        url=f"{frontend_url}/auth/signin", status_code=status.HTTP_302_FOUND
    )
    set_handoff_cookie(redirect, response.handoff, response.max_age, settings)
    return redirect
