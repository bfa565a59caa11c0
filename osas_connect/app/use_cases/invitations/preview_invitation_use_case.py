"""
Preview Invitation Use Case

Read-only token check behind the accept form. Never changes state.
"""

from datetime import datetime
from typing import Callable

from osas_connect.app.services.invitation_tokens import hash_token
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import InvitationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import InvitationPreviewResponse


class PreviewInvitationUseCase:
    def __init__(self, uow: UnitOfWork, now: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.now = now

    async def execute(self, token: str) -> Result[InvitationPreviewResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None:
                return Return.err(
                    Error("TOKEN_NOT_FOUND", "Invalid or non-existent invitation token")
                )

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "ALREADY_CONSUMED",
                        f"This invitation is {invitation.status.value}",
                    )
                )

            if invitation.is_past_expiry(self.now()):
                return Return.err(Error("TOKEN_EXPIRED", "This invitation has expired"))

            inviter = await self.uow.users.get_by_id(invitation.inviter_id)

            return Return.ok(
                InvitationPreviewResponse(
                    email=invitation.email,
                    role=invitation.role.value,
                    position=invitation.position,
                    department=invitation.department,
                    inviter_name=(inviter.full_name or inviter.email) if inviter else None,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )
