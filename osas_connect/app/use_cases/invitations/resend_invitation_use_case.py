"""
Resend Invitation Use Case

Handles re-issuing a pending invitation with a fresh token.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.invitation_tokens import generate_token
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize, forbidden
from osas_connect.domain.authorization import Action, can_perform
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import InvitationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import ResendInvitationResponse
from .invite_staff_use_case import DEFAULT_INVITATION_TTL
from .notify import build_invitation_notification, dispatch_invitation

logger = logging.getLogger(__name__)


class ResendInvitationUseCase:
    """
    Use case for resending pending invitations.

    Business Rules:
    - Only admins and OSAS staff can resend (admin invitations: admins only)
    - Only pending invitations can be resent; others fail with ALREADY_CONSUMED
    - A new token replaces the old one, so the previous email link stops working
    - expires_at restarts from now; created_at keeps the original invite date
    - Token rotation is a compare-and-set on the old token hash, so of two
      concurrent resends only one hands out a valid token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: NotificationDispatcher,
        base_url: str,
        ttl: timedelta = DEFAULT_INVITATION_TTL,
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.base_url = base_url
        self.ttl = ttl
        self.now = now

    async def execute(
        self, actor_id: UUID, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        """
        Execute resend invitation use case.

        Args:
            actor_id: User ID of the person resending the invite
            invitation_id: ID of the invitation to resend

        Returns:
            Result with ResendInvitationResponse DTO, or Error
        """
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.resend_invitation)
            if auth.is_err():
                return auth
            actor = auth.value

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if not can_perform(
                actor.role, Action.resend_invitation, target_role=invitation.role
            ):
                return forbidden()

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "ALREADY_CONSUMED",
                        f"Cannot resend an invitation that is {invitation.status.value}",
                    )
                )

            token, token_hash = generate_token()
            expires_at = self.now() + self.ttl

            updated = await self.uow.invitations.compare_and_set(
                invitation.id,
                InvitationStatus.pending,
                expected_token_hash=invitation.token_hash,
                token_hash=token_hash,
                expires_at=expires_at,
            )
            if updated is None:
                return Return.err(
                    Error(
                        "ALREADY_CONSUMED",
                        "Invitation changed since it was loaded",
                    )
                )

            await record_audit_event(
                self.uow,
                user_id=actor.id,
                action="invitation_resent",
                entity_type="invitation",
                entity_id=invitation.id,
                email=invitation.email,
            )

            inviter = await self.uow.users.get_by_id(invitation.inviter_id) or actor

            await self.uow.commit()

        logger.info("Invitation %s resent by %s", invitation.id, actor.id)

        payload = build_invitation_notification(inviter, self.base_url, token, expires_at)
        await dispatch_invitation(self.dispatcher, updated.email, payload)

        return Return.ok(
            ResendInvitationResponse(status="resent", expires_at=expires_at.isoformat())
        )
