"""Invitation use cases."""

from .create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from .list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from .open_invitation import (
    OpenInvitationRequest,
    OpenInvitationResponse,
    OpenInvitationUseCase,
)

__all__ = [
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "OpenInvitationRequest",
    "OpenInvitationResponse",
    "OpenInvitationUseCase",
]
