"""User domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from shelf.domain.error import NotFoundError
from shelf.domain.model import User, UserIdentity
from shelf.domain.model.common import utcnow
from shelf.domain.repository import UserIdentityRepository, UserRepository
from shelf.domain.value import (
    Email,
    OAuthProviderInfo,
    UserId,
    UserIdentityId,
)

from .base import Service


class UserService(Service):
    """Domain service for users and their provider identities."""

    def __init__(
        self,
        user_repository: UserRepository,
        user_identity_repository: UserIdentityRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            user_identity_repository: User identity repository
        """
        self.user_repository = user_repository
        self.user_identity_repository = user_identity_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: Email) -> User | None:
        """Get user by email.

        Args:
            email: Normalised email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email", email=email.root):
            return await self.user_repository.find_by_email(email)

    async def find_for_sign_in(self, info: OAuthProviderInfo) -> User | None:
        """Find the registered user behind a provider sign-in.

        Looks up the linked provider account first, then the email.

        Args:
            info: Provider user information

        Returns:
            The registered user, None for a new identity
        """
        with logfire.span(
            "user_service.find_for_sign_in",
            provider=info.provider.value,
            provider_user_id=info.provider_user_id,
        ):
            user = await self.user_repository.find_by_provider_identity(
                info.provider, info.provider_user_id
            )
            if not user and info.email:
                user = await self.user_repository.find_by_email(Email(info.email))
            logfire.info("Sign-in lookup", registered=user is not None)
            return user

    async def register(self, info: OAuthProviderInfo, now: datetime | None = None) -> User:
        """Create a user and its first provider identity.

        Only called after the access gate admitted the sign-in.

        Args:
            info: Provider user information
            now: Creation time

        Returns:
            The new user
        """
        now = now or utcnow()
        with logfire.span(
            "user_service.register",
            provider=info.provider.value,
            provider_user_id=info.provider_user_id,
        ):
            user = User(
                id=UserId(uuid4()),
                email=Email(info.email) if info.email else None,
                display_name=info.display_name or info.handle,
                avatar_url=info.avatar_url,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            await self._link(saved.id, info, now)
            logfire.info("User registered", user_id=str(saved.id))
            return saved

    async def record_sign_in(
        self, user: User, info: OAuthProviderInfo, now: datetime | None = None
    ) -> None:
        """Update the identity used to sign in, linking it if it is new.

        Args:
            user: Registered user
            info: Provider user information
            now: Sign-in time
        """
        now = now or utcnow()
        with logfire.span("user_service.record_sign_in", user_id=str(user.id)):
            identity = await self.user_identity_repository.find_by_provider(
                info.provider, info.provider_user_id
            )
            if identity is None:
                await self._link(user.id, info, now)
                logfire.info(
                    "Provider identity linked to existing user",
                    user_id=str(user.id),
                    provider=info.provider.value,
                )
                return

            await self.user_identity_repository.save(
                identity.model_copy(
                    update={
                        "provider_handle": info.handle,
                        "provider_email": info.email,
                        "updated_at": now,
                        "last_login_at": now,
                    }
                )
            )

    async def _link(self, user_id: UserId, info: OAuthProviderInfo, now: datetime) -> None:
        identity = UserIdentity(
            id=UserIdentityId(uuid4()),
            user_id=user_id,
            provider=info.provider,
            provider_user_id=info.provider_user_id,
            provider_handle=info.handle,
            provider_email=info.email,
            created_at=now,
            updated_at=now,
            last_login_at=now,
        )
        await self.user_identity_repository.save(identity)
