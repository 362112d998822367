"""Application layer DI providers."""

from dishka import Scope, provide

from shelf.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from shelf.application.usecase.collection import (
    AddCollectionMediaUseCase,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    GetCollectionUseCase,
    ListCollectionsUseCase,
    RemoveCollectionMediaUseCase,
    UpdateCollectionUseCase,
)
from shelf.application.usecase.invitation import (
    CreateInvitationUseCase,
    ListInvitationsUseCase,
    OpenInvitationUseCase,
)
from shelf.application.usecase.media import (
    DeleteMediaUseCase,
    GetMediaUseCase,
    ListDeletedMediaUseCase,
    ListMediaUseCase,
    PurgeMediaUseCase,
    RestoreMediaUseCase,
    UpdateMediaUseCase,
    UploadMediaUseCase,
)
from shelf.application.usecase.tag import ListTagsUseCase
from shelf.config import LibrarySettings, Settings
from shelf.domain.repository import UserIdentityRepository
from shelf.domain.service import (
    AccessGateService,
    AuthService,
    CollectionService,
    EmailService,
    HandoffService,
    InvitationService,
    JWTService,
    LifecycleService,
    MediaService,
    PurgeService,
    TagService,
    UserService,
)
from shelf.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_service: UserService,
        handoff_service: HandoffService,
        access_gate: AccessGateService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            user_service=user_service,
            handoff_service=handoff_service,
            access_gate=access_gate,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        jwt_service: JWTService,
        user_service: UserService,
        user_identity_repository: UserIdentityRepository,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service,
            user_service=user_service,
            user_identity_repository=user_identity_repository,
        )

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        email_service: EmailService,
        settings: Settings,
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service,
            email_service=email_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_open_invitation_use_case(
        self, invitation_service: InvitationService, handoff_service: HandoffService
    ) -> OpenInvitationUseCase:
        """Provide open invitation use case."""
        return OpenInvitationUseCase(
            invitation_service=invitation_service, handoff_service=handoff_service
        )

    # Media use cases
    @provide(scope=Scope.REQUEST)
    def get_list_media_use_case(
        self, lifecycle_service: LifecycleService
    ) -> ListMediaUseCase:
        """Provide list media use case."""
        return ListMediaUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_get_media_use_case(self, media_service: MediaService) -> GetMediaUseCase:
        """Provide get media use case."""
        return GetMediaUseCase(media_service=media_service)

    @provide(scope=Scope.REQUEST)
    def get_upload_media_use_case(
        self, media_service: MediaService
    ) -> UploadMediaUseCase:
        """Provide upload media use case."""
        return UploadMediaUseCase(media_service=media_service)

    @provide(scope=Scope.REQUEST)
    def get_update_media_use_case(
        self, media_service: MediaService
    ) -> UpdateMediaUseCase:
        """Provide update media use case."""
        return UpdateMediaUseCase(media_service=media_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_media_use_case(
        self, lifecycle_service: LifecycleService, library_settings: LibrarySettings
    ) -> DeleteMediaUseCase:
        """Provide soft delete use case."""
        return DeleteMediaUseCase(
            lifecycle_service=lifecycle_service, library_settings=library_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_restore_media_use_case(
        self, lifecycle_service: LifecycleService
    ) -> RestoreMediaUseCase:
        """Provide restore use case."""
        return RestoreMediaUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_list_deleted_media_use_case(
        self, lifecycle_service: LifecycleService
    ) -> ListDeletedMediaUseCase:
        """Provide list deleted media use case."""
        return ListDeletedMediaUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_purge_media_use_case(
        self, purge_service: PurgeService
    ) -> PurgeMediaUseCase:
        """Provide purge sweep use case."""
        return PurgeMediaUseCase(purge_service=purge_service)

    # Collection use cases
    @provide(scope=Scope.REQUEST)
    def get_list_collections_use_case(
        self, collection_service: CollectionService
    ) -> ListCollectionsUseCase:
        """Provide list collections use case."""
        return ListCollectionsUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_create_collection_use_case(
        self, collection_service: CollectionService
    ) -> CreateCollectionUseCase:
        """Provide create collection use case."""
        return CreateCollectionUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_get_collection_use_case(
        self, collection_service: CollectionService
    ) -> GetCollectionUseCase:
        """Provide get collection use case."""
        return GetCollectionUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_update_collection_use_case(
        self, collection_service: CollectionService
    ) -> UpdateCollectionUseCase:
        """Provide update collection use case."""
        return UpdateCollectionUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_collection_use_case(
        self, collection_service: CollectionService
    ) -> DeleteCollectionUseCase:
        """Provide delete collection use case."""
        return DeleteCollectionUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_add_collection_media_use_case(
        self, collection_service: CollectionService
    ) -> AddCollectionMediaUseCase:
        """Provide add-to-collection use case."""
        return AddCollectionMediaUseCase(collection_service=collection_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_collection_media_use_case(
        self, collection_service: CollectionService
    ) -> RemoveCollectionMediaUseCase:
        """Provide remove-from-collection use case."""
        return RemoveCollectionMediaUseCase(collection_service=collection_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, tag_service: TagService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service)
