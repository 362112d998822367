"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from shelf.adapter.error import AdapterError
from shelf.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from shelf.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from shelf.application.usecase.auth.login import LoginRequest
from shelf.config import Settings
from shelf.domain.error import AccessDeniedError
from shelf.domain.service import AuthService
from shelf.domain.value import AuthProvider
from shelf.interface.api.routes.cookies import (
    clear_auth_cookie,
    clear_handoff_cookie,
    set_auth_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class InitiateLoginRequest(BaseModel):
    """Initiate login request."""

    provider: AuthProvider = AuthProvider.GITHUB


class InitiateLoginResponse(BaseModel):
    """Initiate login response."""

    authorization_url: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


@router.post("/login", response_model=InitiateLoginResponse)
async def initiate_login(
    request: InitiateLoginRequest,
    auth_service: FromDishka[AuthService],
) -> InitiateLoginResponse:
    """Initiate OAuth login flow.

    Example:
        POST /auth/login
        {"provider": "github"}

        Response:
        {"authorization_url": "https://github.com/login/oauth/authorize?..."}
    """
    logger.info(f"Initiating {request.provider.value} login")
    state = secrets.token_urlsafe(32)
    auth_url = await auth_service.initiate_login(request.provider, state)
    return InitiateLoginResponse(authorization_url=auth_url)


@router.get("/callback/github")
async def github_callback(
    code: str,
    state: str,
    request: Request,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
):
    """Handle GitHub OAuth callback and complete login.

    Reads the invitation handoff cookie, runs the invitation-gated login,
    issues the session cookie and redirects to the frontend.

    Example:
        GET /auth/callback/github?code=abc123&state=xyz789

        Redirects to: https://shelf.example.com/
        Sets cookie: auth_token
    """
    handoff = request.cookies.get(settings.invitations.handoff_cookie_name)
    logger.info(
        f"OAuth callback received: provider=github, has_handoff={handoff is not None}"
    )

    frontend_url = settings.api.frontend_url
    try:
        login_response = await login_use_case.execute(
            LoginRequest(
                provider=AuthProvider.GITHUB,
                code=code,
                state=state,
                handoff=handoff,
            )
        )
    except AccessDeniedError as e:
        logger.warning(f"Sign-in denied: {e}")
        redirect = RedirectResponse(
            url=f"{frontend_url}/auth/unauthorized",
            status_code=status.HTTP_302_FOUND,
        )
        clear_handoff_cookie(redirect, settings)
        return redirect
    except AdapterError as e:
        logger.error(f"OAuth provider error during callback: {e}")
        return RedirectResponse(
            url=f"{frontend_url}/auth/error?error=auth_failed",
            status_code=status.HTTP_302_FOUND,
        )

    logger.info(
        f"Login successful for user {login_response.user_id} "
        f"(new={login_response.is_new_user}, via={login_response.admitted_by.value})"
    )

    # Cookies must be set on the returned RedirectResponse itself
    redirect = RedirectResponse(url=frontend_url, status_code=status.HTTP_302_FOUND)
    set_auth_cookie(redirect, login_response.token, settings)
    clear_handoff_cookie(redirect, settings)
    return redirect


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    clear_auth_cookie(response)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentUserResponse:
    """Session status. Never fails: signed-out callers get authenticated=false."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=auth_token)
    )
