"""Invitation handoff domain service.

The handoff carries an invitation token from the moment the invitation link
is opened to the moment the identity provider calls back. The value placed
in the cookie is a signed token with its own expiry, so a stale or forged
cookie is rejected even if the browser keeps it.
"""

import logfire

from shelf.config import AuthSettings, InvitationSettings
from shelf.domain.value import InvitationToken
from shelf.util.jwt import JWTError, create_handoff_token, verify_handoff_token

from .base import Service


class HandoffService(Service):
    """Signs and verifies invitation handoff tokens."""

    def __init__(
        self, auth_settings: AuthSettings, invitation_settings: InvitationSettings
    ) -> None:
        """Initialize handoff service.

        Args:
            auth_settings: Provides the signing key and algorithm
            invitation_settings: Provides the handoff lifetime
        """
        self.auth_settings = auth_settings
        self.invitation_settings = invitation_settings

    @property
    def ttl_seconds(self) -> int:
        """Lifetime of a handoff token and its cookie."""
        return self.invitation_settings.handoff_ttl_seconds

    def issue(self, token: InvitationToken) -> str:
        """Sign an invitation token for the handoff cookie.

        Args:
            token: Invitation token that was validated as consumable

        Returns:
            Signed, self-expiring handoff token
        """
        with logfire.span("handoff_service.issue", token=token.root[:8] + "..."):
            return create_handoff_token(
                token.root, self.ttl_seconds, self.auth_settings
            )

    def redeem(self, handoff: str | None) -> InvitationToken | None:
        """Recover the invitation token from a handoff cookie value.

        Missing, tampered, expired or malformed values count as no handoff.

        Args:
            handoff: Raw cookie value

        Returns:
            The invitation token, or None
        """
        if not handoff:
            return None

        with logfire.span("handoff_service.redeem"):
            try:
                payload = verify_handoff_token(handoff, self.auth_settings)
                return InvitationToken(payload.invitation_token)
            except (JWTError, ValueError) as e:
                logfire.warn("Handoff token rejected", error=str(e))
                return None
