"""JWT token domain service."""

from uuid import UUID

import logfire

from shelf.config import AuthSettings
from shelf.domain.error import UnauthorizedError
from shelf.domain.value import UserId
from shelf.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str | None) -> str:
        """Create a session token for a user.

        Args:
            user_id: User ID
            email: User email, if known

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, email, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def require_user_id(self, token: str | None) -> UserId:
        """Resolve the caller from a session cookie.

        Args:
            token: JWT token string from the ``auth_token`` cookie

        Returns:
            The authenticated user's ID

        Raises:
            UnauthorizedError: If the token is missing, invalid or expired
        """
        if not token:
            raise UnauthorizedError("Not authenticated")
        try:
            payload = self.verify_token(token)
            return UserId(UUID(payload.user_id))
        except (JWTError, ValueError) as e:
            raise UnauthorizedError(str(e))
