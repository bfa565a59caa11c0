"""
StaffInvitation Entity

Email invitation for a new OSAS staff or admin account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from osas_connect.domain.clock import utcnow

from .enums import InvitationStatus, UserRole

_PENDING = text("status = 'pending'")


class StaffInvitation(SQLModel, table=True):
    """
    StaffInvitation entity.

    Business Rules:
    - Created by admin/staff, expires after InvitationTTL (7 days by default)
    - Only the SHA-256 hash of the token is stored; the raw token lives in the email
    - Token is single use and is replaced on resend
    - At most one pending invitation per email
    - Expiry is evaluated when the invitation is used, not by a sweep
    """

    __tablename__ = "staff_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, nullable=False, index=True)
    role: UserRole = Field(nullable=False)
    position: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)

    inviter_id: UUID = Field(foreign_key="users.id", nullable=False)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_staff_invitation_status", "status"),
        Index("idx_staff_invitation_expires_at", "expires_at"),
        Index(
            "uq_staff_invitation_pending_email",
            "email",
            unique=True,
            sqlite_where=_PENDING,
            postgresql_where=_PENDING,
        ),
    )

    def is_past_expiry(self, now: datetime) -> bool:
        return now > self.expires_at

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status as observed at `now`; a pending invitation past expiry reads as expired."""
        if self.status == InvitationStatus.pending and self.is_past_expiry(now):
            return InvitationStatus.expired
        return self.status
