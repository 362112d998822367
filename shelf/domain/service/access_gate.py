"""Access gate domain service.

Decides at sign-in completion whether an identity may get a session. Rules
are checked in order and the first match wins:

1. A handoff invitation that is consumable for this candidate is consumed.
   This applies to registered members too.
2. Registered members are admitted.
3. Without a handoff, an invitation scoped to the candidate's email is
   consumed, then a general invitation.
4. Everyone else is denied.

Rule 3 lets a new signup take any stray general invitation. It is kept
for compatibility with links shared before handoff tokens existed.
"""

from datetime import datetime

import logfire

from shelf.domain.model.common import utcnow
from shelf.domain.value import (
    AccessCandidate,
    AccessDecision,
    AccessOutcome,
    AdmissionPath,
    InvitationToken,
)

from .base import Service
from .invitation_service import InvitationService

# Rounds of fallback lookups when racing sign-ins keep winning the
# invitation we found
FALLBACK_ATTEMPTS = 3


class AccessGateService(Service):
    """Domain service deciding admission at sign-in."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize access gate.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def decide(
        self,
        candidate: AccessCandidate,
        handoff_token: InvitationToken | None,
        now: datetime | None = None,
    ) -> AccessDecision:
        """Decide whether a sign-in is admitted.

        Args:
            candidate: Email and registration status of the identity
            handoff_token: Invitation token recovered from the handoff
                cookie, None if absent or invalid
            now: Decision time

        Returns:
            Admit with the rule that matched, or Deny
        """
        now = now or utcnow()
        with logfire.span(
            "access_gate.decide",
            email=candidate.email.root if candidate.email else None,
            is_registered=candidate.is_registered,
            has_handoff=handoff_token is not None,
        ):
            if handoff_token is not None:
                decision = await self._try_handoff(candidate, handoff_token, now)
                if decision:
                    return decision

            if candidate.is_registered:
                logfire.info("Registered member admitted")
                return AccessDecision(
                    outcome=AccessOutcome.ADMIT, path=AdmissionPath.REGISTERED
                )

            decision = await self._try_fallback(candidate, now)
            if decision:
                return decision

            logfire.warn(
                "Sign-in denied",
                email=candidate.email.root if candidate.email else None,
            )
            return AccessDecision(outcome=AccessOutcome.DENY)

    async def _try_handoff(
        self, candidate: AccessCandidate, token: InvitationToken, now: datetime
    ) -> AccessDecision | None:
        invitation = await self.invitation_service.find_by_token(token)
        if not invitation or not invitation.is_consumable(now, candidate.email):
            logfire.warn(
                "Handoff invitation not usable",
                token=token.root[:8] + "...",
                found=invitation is not None,
            )
            return None

        if not await self.invitation_service.consume(invitation, now):
            return None

        logfire.info("Admitted by handoff invitation", invitation_id=str(invitation.id))
        return AccessDecision(
            outcome=AccessOutcome.ADMIT,
            path=AdmissionPath.HANDOFF,
            invitation_id=invitation.id,
        )

    async def _try_fallback(
        self, candidate: AccessCandidate, now: datetime
    ) -> AccessDecision | None:
        if candidate.email is None:
            return None

        for _ in range(FALLBACK_ATTEMPTS):
            invitations = await self.invitation_service.find_fallback(
                candidate.email, now
            )
            if not invitations:
                return None

            for invitation in invitations:
                if not await self.invitation_service.consume(invitation, now):
                    continue

                if invitation.email is None:
                    path = AdmissionPath.GENERAL_INVITATION
                    logfire.warn(
                        "General invitation consumed without handoff",
                        invitation_id=str(invitation.id),
                        email=candidate.email.root,
                    )
                else:
                    path = AdmissionPath.EMAIL_INVITATION
                    logfire.info(
                        "Admitted by email invitation",
                        invitation_id=str(invitation.id),
                    )
                return AccessDecision(
                    outcome=AccessOutcome.ADMIT,
                    path=path,
                    invitation_id=invitation.id,
                )

        return None
