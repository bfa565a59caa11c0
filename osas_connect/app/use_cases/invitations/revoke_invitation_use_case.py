"""
Revoke Invitation Use Case

Handles revoking pending invitations.
"""

import logging
from uuid import UUID

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize, forbidden
from osas_connect.domain.authorization import Action, can_perform
from osas_connect.domain.entities import InvitationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import RevokeInvitationResponse

logger = logging.getLogger(__name__)


class RevokeInvitationUseCase:
    """
    Use case for revoking pending invitations.

    Business Rules:
    - Only admins and OSAS staff can revoke (admin invitations: admins only)
    - Pending -> revoked; the token can never be accepted afterwards
    - Revoking an already revoked invitation succeeds without changes
    - Accepted or expired invitations fail with ALREADY_CONSUMED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        """
        Execute revoke invitation use case.

        Args:
            actor_id: User ID of the person revoking the invite
            invitation_id: ID of the invitation to revoke

        Returns:
            Result with RevokeInvitationResponse DTO, or Error
        """
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.revoke_invitation)
            if auth.is_err():
                return auth
            actor = auth.value

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if not can_perform(
                actor.role, Action.revoke_invitation, target_role=invitation.role
            ):
                return forbidden()

            if invitation.status == InvitationStatus.revoked:
                return Return.ok(RevokeInvitationResponse(status="revoked"))

            if invitation.status != InvitationStatus.pending:
                return self._consumed(invitation.status)

            updated = await self.uow.invitations.compare_and_set(
                invitation.id,
                InvitationStatus.pending,
                status=InvitationStatus.revoked,
            )
            if updated is None:
                # Someone else finished the invitation first
                current = await self.uow.invitations.get_by_id(invitation.id)
                if current is not None and current.status == InvitationStatus.revoked:
                    return Return.ok(RevokeInvitationResponse(status="revoked"))
                return self._consumed(current.status if current else invitation.status)

            await record_audit_event(
                self.uow,
                user_id=actor.id,
                action="invitation_revoked",
                entity_type="invitation",
                entity_id=invitation.id,
                email=invitation.email,
            )

            await self.uow.commit()

            logger.info("Invitation %s revoked by %s", invitation.id, actor.id)

            return Return.ok(RevokeInvitationResponse(status="revoked"))

    @staticmethod
    def _consumed(status: InvitationStatus) -> Result:
        return Return.err(
            Error(
                "ALREADY_CONSUMED",
                f"Cannot revoke an invitation that is {status.value}",
            )
        )
