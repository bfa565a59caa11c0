from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from osas_connect.domain.entities import InvitationStatus, StaffInvitation


class DuplicatePendingInvitation(Exception):
    """Raised by create() when a pending invitation already exists for the email"""


class IInvitationRepository(ABC):
    """Staff invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[StaffInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[StaffInvitation]:
        """Get invitation by SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> Optional[StaffInvitation]:
        """Get the pending invitation for an email, if any"""
        pass

    @abstractmethod
    async def create(self, invitation: StaffInvitation) -> StaffInvitation:
        """
        Create a new invitation.

        Raises:
            DuplicatePendingInvitation: a pending invitation exists for the email
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self,
        invitation_id: UUID,
        expected_status: InvitationStatus,
        expected_token_hash: Optional[str] = None,
        **values: Any,
    ) -> Optional[StaffInvitation]:
        """
        Atomically apply `values` if status (and token hash, when given) still match.

        Returns:
            The refreshed invitation, or None if the precondition failed
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[InvitationStatus] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[StaffInvitation]:
        """
        List invitations, newest first.

        When `now` is given, `status` filters on the effective status: pending
        means pending and not past expiry, expired includes stale pending rows.
        """
        pass

    @abstractmethod
    async def count_pending(self, now: datetime) -> int:
        """Pending invitations that are not past expiry at `now`"""
        pass
