"""Login use case."""

import logfire
from pydantic import BaseModel

from shelf.application.usecase.base import BaseUseCase
from shelf.domain.error import AccessDeniedError
from shelf.domain.model.common import utcnow
from shelf.domain.service import (
    AccessGateService,
    AuthService,
    HandoffService,
    JWTService,
    UserService,
)
from shelf.domain.value import (
    AccessCandidate,
    AdmissionPath,
    AuthProvider,
    Email,
)


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL, plus
    the handoff cookie set when an invitation link was opened.
    """

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter for session verification
    handoff: str | None = None  # Raw value of the handoff cookie


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    email: str | None
    display_name: str
    is_new_user: bool
    admitted_by: AdmissionPath


class LoginUseCase(BaseUseCase[LoginRequest, LoginResponse]):
    """Use case for invitation-gated sign-in via OAuth."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_service: UserService,
        handoff_service: HandoffService,
        access_gate: AccessGateService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            jwt_service: JWT token domain service
            user_service: User domain service
            handoff_service: Verifies the invitation handoff cookie
            access_gate: Decides whether the sign-in is admitted
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.user_service = user_service
        self.handoff_service = handoff_service
        self.access_gate = access_gate

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Complete OAuth flow with provider and get user info
        2. Look up the registered user by provider account, then email
        3. Ask the access gate, passing the handoff invitation if present
        4. Create the user on first admission, or record the sign-in
        5. Generate JWT token

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with JWT token and user info

        Raises:
            AccessDeniedError: If the access gate denies the sign-in
            ProviderError: If OAuth completion fails
        """
        now = utcnow()
        info = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )

        with logfire.span(
            "login.execute",
            provider=info.provider.value,
            provider_user_id=info.provider_user_id,
        ):
            user = await self.user_service.find_for_sign_in(info)
            email = Email(info.email) if info.email else None

            decision = await self.access_gate.decide(
                AccessCandidate(email=email, is_registered=user is not None),
                self.handoff_service.redeem(request.handoff),
                now,
            )
            if not decision.admitted:
                raise AccessDeniedError(email.root if email else None)

            is_new_user = user is None
            if user is None:
                user = await self.user_service.register(info, now)
            else:
                await self.user_service.record_sign_in(user, info, now)

            logfire.info(
                "User signed in",
                user_id=str(user.id),
                is_new_user=is_new_user,
                admitted_by=decision.path.value if decision.path else None,
            )

            token = self.jwt_service.create_token(
                user_id=str(user.id),
                email=user.email.root if user.email else None,
            )

            return LoginResponse(
                token=token,
                user_id=str(user.id),
                email=user.email.root if user.email else None,
                display_name=user.display_name,
                is_new_user=is_new_user,
                admitted_by=decision.path,
            )
