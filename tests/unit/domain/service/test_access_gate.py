"""Unit tests for AccessGateService."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from shelf.domain.model.common import utcnow
from shelf.domain.repository import InvitationRepository
from shelf.domain.service import AccessGateService, InvitationService
from shelf.domain.value import (
    AccessCandidate,
    AccessOutcome,
    AdmissionPath,
    Email,
    UserId,
)
from tests.conftest import make_invitation
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


def candidate(email: str | None, is_registered: bool = False) -> AccessCandidate:
    return AccessCandidate(
        email=Email(email) if email else None, is_registered=is_registered
    )


class TestHandoff:
    """Rule 1: a consumable handoff invitation admits and is consumed."""

    @pytest.mark.asyncio
    async def test_general_invitation_admits_once(self, unit_env):
        """A general invitation used by one identity denies the next one."""
        # Arrange
        invitation_service = await unit_env.get(InvitationService)
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_service.create_invitation(
            created_by=UserId(uuid4()), email=None, expires_in_days=7
        )

        # Act
        first = await gate.decide(candidate("alice@x.com"), invitation.token)
        second = await gate.decide(candidate("bob@x.com"), invitation.token)

        # Assert
        assert first.outcome == AccessOutcome.ADMIT
        assert first.path == AdmissionPath.HANDOFF
        assert first.invitation_id == invitation.id

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is not None

        assert second.outcome == AccessOutcome.DENY
        assert second.path is None

    @pytest.mark.asyncio
    async def test_registered_member_consumes_handoff(self, unit_env):
        """A registered member still consumes the invitation they arrived with."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.save(make_invitation())

        # Act
        decision = await gate.decide(
            candidate("member@x.com", is_registered=True), invitation.token
        )

        # Assert
        assert decision.admitted
        assert decision.path == AdmissionPath.HANDOFF
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is not None

    @pytest.mark.asyncio
    async def test_scoped_handoff_with_other_email_falls_through(self, unit_env):
        """A handoff scoped to another address is not consumed."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.save(make_invitation(email="carol@x.com"))

        # Act
        decision = await gate.decide(candidate("mallory@x.com"), invitation.token)

        # Assert
        assert decision.outcome == AccessOutcome.DENY
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is None

    @pytest.mark.asyncio
    async def test_scoped_handoff_matches_case_insensitively(self, unit_env):
        """Email comparison ignores case."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.save(make_invitation(email="carol@x.com"))

        # Act
        decision = await gate.decide(candidate("Carol@X.com"), invitation.token)

        # Assert
        assert decision.path == AdmissionPath.HANDOFF

    @pytest.mark.asyncio
    async def test_expired_handoff_is_not_consumed(self, unit_env):
        """An expired invitation neither admits nor changes state."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        now = utcnow()
        invitation = await invitation_repo.save(
            make_invitation(created_at=now - timedelta(days=8))
        )

        # Act
        decision = await gate.decide(candidate("alice@x.com"), invitation.token, now)

        # Assert
        assert decision.outcome == AccessOutcome.DENY
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is None

    @pytest.mark.asyncio
    async def test_concurrent_sign_ins_admit_exactly_one(self, unit_env):
        """Two sign-ins racing on one general invitation produce one winner."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.save(make_invitation())

        # Act
        decisions = await asyncio.gather(
            gate.decide(candidate("alice@x.com"), invitation.token),
            gate.decide(candidate("bob@x.com"), invitation.token),
        )

        # Assert
        assert sum(1 for d in decisions if d.admitted) == 1


class TestRegistered:
    """Rule 2: registered members are admitted without an invitation."""

    @pytest.mark.asyncio
    async def test_registered_member_admitted_without_handoff(self, unit_env):
        """No invitation is needed or consumed."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        spare = await invitation_repo.save(make_invitation())

        # Act
        decision = await gate.decide(candidate("member@x.com", is_registered=True), None)

        # Assert
        assert decision.path == AdmissionPath.REGISTERED
        assert decision.invitation_id is None
        stored = await invitation_repo.find_by_id(spare.id)
        assert stored.used_at is None

    @pytest.mark.asyncio
    async def test_registered_member_with_used_handoff(self, unit_env):
        """A consumed handoff does not stop a registered member."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.save(make_invitation(used_at=utcnow()))

        # Act
        decision = await gate.decide(
            candidate("member@x.com", is_registered=True), invitation.token
        )

        # Assert
        assert decision.path == AdmissionPath.REGISTERED


class TestFallback:
    """Rule 3: email-scoped then general invitations without a handoff."""

    @pytest.mark.asyncio
    async def test_email_invitation_preferred_over_general(self, unit_env):
        """The scoped invitation is consumed and the general one kept."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        now = utcnow()
        general = await invitation_repo.save(
            make_invitation(created_at=now - timedelta(hours=2))
        )
        scoped = await invitation_repo.save(
            make_invitation(email="dave@x.com", created_at=now - timedelta(hours=1))
        )

        # Act
        decision = await gate.decide(candidate("dave@x.com"), None, now)

        # Assert
        assert decision.path == AdmissionPath.EMAIL_INVITATION
        assert decision.invitation_id == scoped.id
        assert (await invitation_repo.find_by_id(general.id)).used_at is None

    @pytest.mark.asyncio
    async def test_general_invitation_without_handoff(self, unit_env):
        """A stray general invitation admits a new signup."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        general = await invitation_repo.save(make_invitation())

        # Act
        decision = await gate.decide(candidate("erin@x.com"), None)

        # Assert
        assert decision.path == AdmissionPath.GENERAL_INVITATION
        assert decision.invitation_id == general.id

    @pytest.mark.asyncio
    async def test_oldest_general_invitation_consumed_first(self, unit_env):
        """General invitations are taken in creation order."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        now = utcnow()
        newer = await invitation_repo.save(
            make_invitation(created_at=now - timedelta(hours=1))
        )
        older = await invitation_repo.save(
            make_invitation(created_at=now - timedelta(days=1))
        )

        # Act
        decision = await gate.decide(candidate("erin@x.com"), None, now)

        # Assert
        assert decision.invitation_id == older.id
        assert (await invitation_repo.find_by_id(newer.id)).used_at is None

    @pytest.mark.asyncio
    async def test_identity_without_email_denied(self, unit_env):
        """Fallback needs an email, even for general invitations."""
        # Arrange
        gate = await unit_env.get(AccessGateService)
        invitation_repo = await unit_env.get(InvitationRepository)
        await invitation_repo.save(make_invitation())

        # Act
        decision = await gate.decide(candidate(None), None)

        # Assert
        assert decision.outcome == AccessOutcome.DENY

    @pytest.mark.asyncio
    async def test_nothing_available_denied(self, unit_env):
        """Unknown identities with no invitation are denied."""
        # Arrange
        gate = await unit_env.get(AccessGateService)

        # Act
        decision = await gate.decide(candidate("stranger@x.com"), None)

        # Assert
        assert decision.outcome == AccessOutcome.DENY
        assert not decision.admitted
