"""Current session use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from shelf.domain.error import NotFoundError, UnauthorizedError
from shelf.domain.repository import UserIdentityRepository
from shelf.domain.service import JWTService, UserService
from shelf.domain.value import AuthProvider


class GetCurrentUserRequest(BaseModel):
    """Session cookie value, if the browser sent one."""

    token: str | None = None


class UserIdentityInfo(BaseModel):
    """Linked provider account."""

    provider: AuthProvider
    provider_handle: str
    last_login_at: datetime | None


class CurrentUser(BaseModel):
    """Signed-in member."""

    user_id: str
    email: str | None
    display_name: str
    avatar_url: str | None
    created_at: datetime
    identities: list[UserIdentityInfo]


class GetCurrentUserResponse(BaseModel):
    """Session status; ``user`` is set only when authenticated."""

    authenticated: bool
    user: CurrentUser | None = None


class GetCurrentUserUseCase:
    """Resolve the session cookie to a member without raising.

    Missing, invalid or expired tokens and tokens for users that no longer
    exist all report ``authenticated=False``.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        user_service: UserService,
        user_identity_repository: UserIdentityRepository,
    ) -> None:
        self.jwt_service = jwt_service
        self.user_service = user_service
        self.user_identity_repository = user_identity_repository

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        try:
            user_id = self.jwt_service.require_user_id(request.token)
            user = await self.user_service.get_by_id(user_id)
        except (UnauthorizedError, NotFoundError) as e:
            if request.token:
                logfire.info("Session cookie rejected", reason=str(e))
            return GetCurrentUserResponse(authenticated=False)

        identities = await self.user_identity_repository.find_all_by_user_id(user.id)
        return GetCurrentUserResponse(
            authenticated=True,
            user=CurrentUser(
                user_id=str(user.id),
                email=user.email.root if user.email else None,
                display_name=user.display_name,
                avatar_url=user.avatar_url,
                created_at=user.created_at,
                identities=[
                    UserIdentityInfo(
                        provider=identity.provider,
                        provider_handle=identity.provider_handle,
                        last_login_at=identity.last_login_at,
                    )
                    for identity in identities
                ],
            ),
        )
