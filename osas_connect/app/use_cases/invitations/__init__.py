"""
Staff Invitation Use Cases

The invitation lifecycle: invite, resend, revoke, accept, and reads.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    InvitationListResponse,
    InvitationPreviewResponse,
    InvitationResponse,
    InviteStaffResponse,
    ResendInvitationResponse,
    RevokeInvitationResponse,
)
from .invite_staff_use_case import DEFAULT_INVITATION_TTL, InviteStaffUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .preview_invitation_use_case import PreviewInvitationUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase

__all__ = [
    "InviteStaffUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "AcceptInvitationUseCase",
    "PreviewInvitationUseCase",
    "ListInvitationsUseCase",
    "DEFAULT_INVITATION_TTL",
    "InviteStaffResponse",
    "ResendInvitationResponse",
    "RevokeInvitationResponse",
    "AcceptInvitationResponse",
    "InvitationPreviewResponse",
    "InvitationResponse",
    "InvitationListResponse",
]
