"""Domain layer DI providers."""

from dishka import Scope, provide

from shelf.config import AuthSettings, InvitationSettings, LibrarySettings
from shelf.domain.repository import (
    CollectionRepository,
    InvitationRepository,
    MediaRepository,
    TagRepository,
    UnitOfWork,
    UserIdentityRepository,
    UserRepository,
)
from shelf.domain.service import (
    AccessGateService,
    AuthService,
    BlobStorageClient,
    CollectionService,
    EmailClient,
    EmailService,
    HandoffService,
    InvitationService,
    JWTService,
    LifecycleService,
    MediaService,
    OAuthClient,
    PurgeService,
    StorageService,
    TagService,
    UserService,
)
from shelf.domain.value import AuthProvider
from shelf.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_handoff_service(
        self, auth_settings: AuthSettings, invitation_settings: InvitationSettings
    ) -> HandoffService:
        """Provide invitation handoff domain service."""
        return HandoffService(
            auth_settings=auth_settings, invitation_settings=invitation_settings
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        user_identity_repository: UserIdentityRepository,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            user_identity_repository=user_identity_repository,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            user_repository=user_repository,
            max_expiry_days=invitation_settings.max_expiry_days,
        )

    @provide
    def get_access_gate(self, invitation_service: InvitationService) -> AccessGateService:
        """Provide sign-in admission domain service."""
        return AccessGateService(invitation_service=invitation_service)

    @provide
    def get_email_service(self, email_client: EmailClient) -> EmailService:
        """Provide invitation email domain service."""
        return EmailService(email_client=email_client)

    @provide
    def get_storage_service(self, storage_client: BlobStorageClient) -> StorageService:
        """Provide blob storage domain service."""
        return StorageService(storage_client=storage_client)

    @provide
    def get_tag_service(self, tag_repository: TagRepository) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository)

    @provide
    def get_media_service(
        self, media_repository: MediaRepository, tag_service: TagService
    ) -> MediaService:
        """Provide media domain service."""
        return MediaService(media_repository=media_repository, tag_service=tag_service)

    @provide
    def get_lifecycle_service(
        self, media_repository: MediaRepository, library_settings: LibrarySettings
    ) -> LifecycleService:
        """Provide soft delete / restore domain service."""
        return LifecycleService(
            media_repository=media_repository,
            retention_days=library_settings.retention_days,
        )

    @provide
    def get_purge_service(
        self,
        media_repository: MediaRepository,
        tag_repository: TagRepository,
        collection_repository: CollectionRepository,
        storage_service: StorageService,
        library_settings: LibrarySettings,
        unit_of_work: UnitOfWork,
    ) -> PurgeService:
        """Provide purge sweeper domain service."""
        return PurgeService(
            media_repository=media_repository,
            tag_repository=tag_repository,
            collection_repository=collection_repository,
            storage_service=storage_service,
            library_settings=library_settings,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_collection_service(
        self,
        collection_repository: CollectionRepository,
        media_repository: MediaRepository,
    ) -> CollectionService:
        """Provide collection domain service."""
        return CollectionService(
            collection_repository=collection_repository,
            media_repository=media_repository,
        )
