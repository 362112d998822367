"""Unit tests for LoginUseCase."""

from uuid import uuid4

import pytest
from dishka import AsyncContainer

from shelf.application.usecase.auth.login import LoginRequest, LoginUseCase
from shelf.application.usecase.invitation.open_invitation import (
    OpenInvitationRequest,
    OpenInvitationUseCase,
)
from shelf.domain.error import AccessDeniedError
from shelf.domain.repository import InvitationRepository, UserIdentityRepository
from shelf.domain.service import InvitationService, JWTService, UserService
from shelf.domain.value import AdmissionPath, AuthProvider, Email, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def open_link(unit_env: AsyncContainer, token: str) -> str | None:
    """Open an invitation link and return the handoff cookie value."""
    open_invitation = await unit_env.get(OpenInvitationUseCase)
    response = await open_invitation.execute(OpenInvitationRequest(token=token))
    return response.handoff


def github_login(code: str, handoff: str | None = None) -> LoginRequest:
    return LoginRequest(
        provider=AuthProvider.GITHUB, code=code, state="state-123", handoff=handoff
    )


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_new_user_admitted_by_handoff(self, unit_env: AsyncContainer):
        """Opening a general invitation then signing in creates the member."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        identity_repo = await unit_env.get(UserIdentityRepository)
        jwt_service = await unit_env.get(JWTService)
        invitation = await invitation_service.create_invitation(UserId(uuid4()))
        handoff = await open_link(unit_env, invitation.token.root)

        # Act
        response = await login.execute(github_login("alice", handoff))

        # Assert
        assert response.is_new_user is True
        assert response.admitted_by == AdmissionPath.HANDOFF
        assert response.email == "alice@example.com"
        assert response.display_name == "Alice"

        identity = await identity_repo.find_by_provider(AuthProvider.GITHUB, "gh-alice")
        assert identity is not None
        assert str(identity.user_id) == response.user_id

        payload = jwt_service.verify_token(response.token)
        assert payload.user_id == response.user_id

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is not None

    @pytest.mark.asyncio
    async def test_reused_link_denies_second_identity(self, unit_env: AsyncContainer):
        """A consumed invitation does not admit anyone else."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        user_service = await unit_env.get(UserService)
        invitation = await invitation_service.create_invitation(UserId(uuid4()))
        handoff = await open_link(unit_env, invitation.token.root)
        await login.execute(github_login("alice", handoff))

        # Act & Assert
        with pytest.raises(AccessDeniedError):
            await login.execute(github_login("bob", handoff))

        assert await user_service.get_user_by_email(Email("bob@example.com")) is None

    @pytest.mark.asyncio
    async def test_used_link_cannot_be_opened_again(self, unit_env: AsyncContainer):
        """After consumption the link yields no handoff."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.create_invitation(UserId(uuid4()))
        await login.execute(
            github_login("alice", await open_link(unit_env, invitation.token.root))
        )

        # Act
        handoff = await open_link(unit_env, invitation.token.root)

        # Assert
        assert handoff is None

    @pytest.mark.asyncio
    async def test_returning_member_admitted(self, unit_env: AsyncContainer):
        """A registered member signs in without any invitation."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.create_invitation(UserId(uuid4()))
        first = await login.execute(
            github_login("alice", await open_link(unit_env, invitation.token.root))
        )

        # Act
        second = await login.execute(github_login("alice"))

        # Assert
        assert second.is_new_user is False
        assert second.admitted_by == AdmissionPath.REGISTERED
        assert second.user_id == first.user_id

    @pytest.mark.asyncio
    async def test_email_invitation_without_handoff(self, unit_env: AsyncContainer):
        """A scoped invitation admits its addressee directly."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        await invitation_service.create_invitation(
            UserId(uuid4()), email=Email("Carol@Example.com")
        )

        # Act
        response = await login.execute(github_login("carol"))

        # Assert
        assert response.is_new_user is True
        assert response.admitted_by == AdmissionPath.EMAIL_INVITATION

    @pytest.mark.asyncio
    async def test_uninvited_identity_denied(self, unit_env: AsyncContainer):
        """Without any invitation a new identity is refused."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        identity_repo = await unit_env.get(UserIdentityRepository)

        # Act & Assert
        with pytest.raises(AccessDeniedError) as exc_info:
            await login.execute(github_login("mallory"))

        assert exc_info.value.email == "mallory@example.com"
        assert (
            await identity_repo.find_by_provider(AuthProvider.GITHUB, "gh-mallory")
            is None
        )

    @pytest.mark.asyncio
    async def test_identity_without_email_needs_handoff(self, unit_env: AsyncContainer):
        """A private-email account gets in only through the link it opened."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.create_invitation(UserId(uuid4()))

        # Act & Assert
        with pytest.raises(AccessDeniedError):
            await login.execute(github_login("dave:noemail"))

        response = await login.execute(
            github_login("dave:noemail", await open_link(unit_env, invitation.token.root))
        )
        assert response.email is None
        assert response.admitted_by == AdmissionPath.HANDOFF

    @pytest.mark.asyncio
    async def test_forged_handoff_ignored(self, unit_env: AsyncContainer):
        """An unsigned token in the handoff cookie counts as no handoff."""
        # Arrange
        login = await unit_env.get(LoginUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation_service = await unit_env.get(InvitationService)
        invitation = await invitation_service.create_invitation(
            UserId(uuid4()), email=Email("someone@example.com")
        )

        # Act & Assert
        with pytest.raises(AccessDeniedError):
            await login.execute(github_login("erin", invitation.token.root))

        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.used_at is None
