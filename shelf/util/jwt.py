"""JWT token utilities.

Two kinds of token share this module: the session token stored in the
``auth_token`` cookie and the invitation handoff token stored in the
``inviteToken`` cookie. They carry different audiences so neither can be
replayed as the other.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from shelf.config import AuthSettings

SESSION_AUDIENCE = "shelf-session"
HANDOFF_AUDIENCE = "shelf-invite-handoff"


class TokenPayload(BaseModel):
    """Session token payload."""

    user_id: str
    email: str | None = None
    exp: datetime


class HandoffPayload(BaseModel):
    """Invitation handoff token payload."""

    invitation_token: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(user_id: str, email: str | None, settings: AuthSettings) -> str:
    """Create a session token for the user.

    Args:
        user_id: User ID
        email: User email, if known
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "exp": expiry,
        "aud": SESSION_AUDIENCE,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    payload = _decode(token, settings, SESSION_AUDIENCE)
    return TokenPayload(**payload)


def create_handoff_token(
    invitation_token: str, ttl_seconds: int, settings: AuthSettings
) -> str:
    """Sign an invitation token with a short expiry.

    Args:
        invitation_token: Raw invitation token
        ttl_seconds: Lifetime of the handoff
        settings: Authentication settings (provides the signing key)

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)

    payload = {
        "invitation_token": invitation_token,
        "exp": expiry,
        "aud": HANDOFF_AUDIENCE,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_handoff_token(token: str, settings: AuthSettings) -> HandoffPayload:
    """Verify and decode an invitation handoff token.

    Args:
        token: JWT token from the handoff cookie
        settings: Authentication settings

    Returns:
        Handoff payload if valid

    Raises:
        JWTError: If token is invalid, tampered with or expired
    """
    payload = _decode(token, settings, HANDOFF_AUDIENCE)
    return HandoffPayload(**payload)


def _decode(token: str, settings: AuthSettings, audience: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=audience,
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
