"""Domain services."""

from .access_gate import AccessGateService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .collection_service import CollectionService
from .email_service import EmailClient, EmailMessage, EmailService
from .handoff_service import HandoffService
from .invitation_service import InvitationService
from .jwt_service import JWTService
from .lifecycle_service import LifecycleService
from .media_service import MediaService
from .purge_service import PurgeService
from .storage_service import BlobStorageClient, StorageService
from .tag_service import TagService
from .user_service import UserService

__all__ = [
    "AccessGateService",
    "AuthService",
    "BlobStorageClient",
    "CollectionService",
    "EmailClient",
    "EmailMessage",
    "EmailService",
    "HandoffService",
    "InvitationService",
    "JWTService",
    "LifecycleService",
    "MediaService",
    "OAuthClient",
    "PurgeService",
    "Service",
    "StorageService",
    "TagService",
    "UserService",
]
