"""
Invitation Use Case DTOs (Data Transfer Objects)

Response classes for the staff invitation lifecycle.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from osas_connect.domain.entities import StaffInvitation


# ============================================================================
# Response DTOs
# ============================================================================


class InviteStaffResponse(BaseModel):
    """Response for invite staff use case"""

    invite_id: str
    email: str
    role: str
    status: str
    created_at: str
    expires_at: str


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    status: str
    expires_at: str


class RevokeInvitationResponse(BaseModel):
    """Response for revoke invitation use case"""

    status: str


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    user_id: str
    email: str
    role: str
    invitation_id: str
    status: str


class InvitationPreviewResponse(BaseModel):
    """What the accept form shows before the invitee signs up"""

    email: str
    role: str
    position: Optional[str] = None
    department: Optional[str] = None
    inviter_name: Optional[str] = None
    expires_at: str


class InvitationResponse(BaseModel):
    """One invitation row in the staff management table"""

    id: str
    email: str
    role: str
    position: Optional[str] = None
    department: Optional[str] = None
    status: str
    inviter_id: str
    created_at: str
    expires_at: str
    accepted_at: Optional[str] = None

    @classmethod
    def from_entity(cls, invitation: StaffInvitation, now: datetime) -> "InvitationResponse":
        return cls(
            id=str(invitation.id),
            email=invitation.email,
            role=invitation.role.value,
            position=invitation.position,
            department=invitation.department,
            status=invitation.effective_status(now).value,
            inviter_id=str(invitation.inviter_id),
            created_at=invitation.created_at.isoformat(),
            expires_at=invitation.expires_at.isoformat(),
            accepted_at=(
                invitation.accepted_at.isoformat() if invitation.accepted_at else None
            ),
        )


class InvitationListResponse(BaseModel):
    items: List[InvitationResponse]
    count: int
