"""
Invite Staff Use Case

Handles inviting a new OSAS staff member or admin by email.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from osas_connect.app.repositories.invitation_repository import DuplicatePendingInvitation
from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.invitation_tokens import generate_token
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import (
    InvitationStatus,
    StaffInvitation,
    UserRole,
)
from osas_connect.libs.result import Error, Result, Return

from .dtos import InviteStaffResponse
from .notify import build_invitation_notification, dispatch_invitation

logger = logging.getLogger(__name__)

DEFAULT_INVITATION_TTL = timedelta(days=7)

_INVITABLE_ROLES = (UserRole.osas_staff, UserRole.admin)


class InviteStaffUseCase:
    """
    Use case for inviting staff.

    Business Rules:
    - Only admins and OSAS staff can invite; inviting an admin needs an admin
    - Role must be osas_staff or admin
    - Email already used by active staff/admin fails with ALREADY_STAFF;
      any other existing account fails with EMAIL_ALREADY_REGISTERED
    - At most one pending invitation per email (ALREADY_INVITED); a pending
      invitation past its expiry is marked expired and no longer blocks
    - Generates a 256-bit URL-safe token, stores only its SHA-256 hash
    - expires_at = created_at + invitation TTL (7 days by default)
    - Email is dispatched after commit; a failed dispatch does not roll back
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
        self,
        inviter_id: UUID,
        email: str,
        role: str = UserRole.osas_staff.value,
        position: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Result[InviteStaffResponse]:
        """
        Execute invite staff use case.

        Args:
            inviter_id: User ID of the person sending the invite
            email: Email address to invite
            role: Role to assign on acceptance (osas_staff/admin)
            position: Job title shown on the staff profile
            department: Office or department of the new staff member

        Returns:
            Result with InviteStaffResponse DTO, or Error
        """
        email = email.strip().lower()

        async with self.uow:
            try:
                invited_role = UserRole(role)
            except ValueError:
                invited_role = None
            if invited_role not in _INVITABLE_ROLES:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {role}. Must be one of: osas_staff, admin",
                    )
                )

            auth = await authorize(
                self.uow, inviter_id, Action.invite_staff, target_role=invited_role
            )
            if auth.is_err():
                return auth
            inviter = auth.value

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None:
                if existing_user.is_active and existing_user.role != UserRole.student:
                    return Return.err(
                        Error("ALREADY_STAFF", "A staff account with this email already exists")
                    )
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_REGISTERED",
                        "This email is already associated with an existing user",
                    )
                )

            now = self.now()
            already_invited = Return.err(
                Error(
                    "ALREADY_INVITED",
                    "A pending invitation already exists for this email",
                )
            )

            pending = await self.uow.invitations.get_pending_by_email(email)
            if pending is not None:
                if not pending.is_past_expiry(now):
                    return already_invited
                expired = await self.uow.invitations.compare_and_set(
                    pending.id,
                    InvitationStatus.pending,
                    expected_token_hash=pending.token_hash,
                    status=InvitationStatus.expired,
                )
                if expired is None:
                    return already_invited
                logger.info("Invitation %s lazily marked expired", pending.id)

            token, token_hash = generate_token()
            invitation = StaffInvitation(
                email=email,
                role=invited_role,
                position=position,
                department=department,
                inviter_id=inviter.id,
                token_hash=token_hash,
                status=InvitationStatus.pending,
                created_at=now,
                expires_at=now + self.ttl,
            )
            try:
                invitation = await self.uow.invitations.create(invitation)
            except DuplicatePendingInvitation:
                return already_invited

            await record_audit_event(
                self.uow,
                user_id=inviter.id,
                action="invite_sent",
                entity_type="invitation",
                entity_id=invitation.id,
                invited_email=email,
                role=invited_role,
            )

            await self.uow.commit()

        logger.info("Invitation %s issued to %s as %s", invitation.id, email, invited_role.value)

        payload = build_invitation_notification(
            inviter, self.base_url, token, invitation.expires_at
        )
        await dispatch_invitation(self.dispatcher, email, payload)

        return Return.ok(
            InviteStaffResponse(
                invite_id=str(invitation.id),
                email=invitation.email,
                role=invitation.role.value,
                status=invitation.status.value,
                created_at=invitation.created_at.isoformat(),
                expires_at=invitation.expires_at.isoformat(),
            )
        )
