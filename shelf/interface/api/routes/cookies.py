"""Cookie helpers shared by the routes."""

from fastapi import Response

from shelf.config import Settings

AUTH_COOKIE = "auth_token"


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session JWT to a response."""
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_auth_cookie(response: Response) -> None:
    """Remove the session JWT."""
    response.delete_cookie(key=AUTH_COOKIE, path="/")


def set_handoff_cookie(
    response: Response, handoff: str, max_age: int, settings: Settings
) -> None:
    """Attach the invitation handoff token to a response."""
    response.set_cookie(
        key=settings.invitations.handoff_cookie_name,
        value=handoff,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=max_age,
    )


def clear_handoff_cookie(response: Response, settings: Settings) -> None:
    """Remove the invitation handoff token once sign-in has read it."""
    response.delete_cookie(key=settings.invitations.handoff_cookie_name, path="/")
