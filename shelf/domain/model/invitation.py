"""Invitation entity.

Invitations gate who may create an account. Each one is single use and
expires after a fixed number of days.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - ``email`` None means any new identity may use it (a general invitation)
    - Consumable iff unused, not expired, and the email matches when scoped
    - ``used_at`` is set once and never cleared
    - Expiry is derived from ``expires_at``, never stored
    """

    id: InvitationId
    token: InvitationToken
    email: Optional[Email] = None
    created_by: UserId
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    used_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the invitation is past its expiry."""
        return self.expires_at < now

    def is_consumable(self, now: datetime, email: Email | None = None) -> bool:
        """Check whether this invitation can admit a candidate.

        Args:
            now: Current time
            email: Candidate email; ignored for general invitations

        Returns:
            True if unused, unexpired and (for scoped invitations) the
            email matches
        """
        if self.used_at is not None or self.is_expired(now):
            return False
        return self.email is None or self.email == email

    def status(self, now: datetime) -> InvitationStatus:
        """Derive the display status."""
        if self.used_at is not None:
            return InvitationStatus.USED
        if self.is_expired(now):
            return InvitationStatus.EXPIRED
        return InvitationStatus.PENDING
