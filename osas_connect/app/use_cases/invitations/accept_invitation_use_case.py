"""
Accept Invitation Use Case

Turns a valid invitation token into a new staff account.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.invitation_tokens import hash_token
from osas_connect.app.services.passwords import hash_password
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import (
    InvitationStatus,
    OsasStaffProfile,
    User,
    UserStatus,
)
from osas_connect.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

_CONSUMED_STATUSES = (
    InvitationStatus.accepted,
    InvitationStatus.revoked,
    InvitationStatus.expired,
)


class AcceptInvitationUseCase:
    """
    Use case for accepting staff invitations.

    Business Rules:
    - Token is looked up by its SHA-256 hash; unknown tokens fail with TOKEN_NOT_FOUND
    - Accepted, revoked or expired invitations fail with ALREADY_CONSUMED
    - A pending invitation past expires_at fails with TOKEN_EXPIRED and is
      marked expired as a side effect
    - On success the invitation is claimed (compare-and-set on status and token
      hash), then the User and staff profile are created in the same transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        now: Callable[[], datetime] = utcnow,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self.uow = uow
        self.now = now
        self.min_password_length = min_password_length

    async def execute(
        self,
        token: str,
        first_name: str,
        last_name: str,
        password: str,
        middle_name: Optional[str] = None,
        staff_id: Optional[str] = None,
    ) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Raw invitation token from the accept URL
            first_name: New user's first name
            last_name: New user's last name
            password: Password for the new account
            middle_name: Optional middle name
            staff_id: Optional employee number for the staff profile

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
        async with self.uow:
            token_hash = hash_token(token)
            invitation = await self.uow.invitations.get_by_token_hash(token_hash)

            if invitation is None:
                return Return.err(
                    Error("TOKEN_NOT_FOUND", "Invalid or non-existent invitation token")
                )

            if invitation.status in _CONSUMED_STATUSES:
                return Return.err(
                    Error(
                        "ALREADY_CONSUMED",
                        f"This invitation is {invitation.status.value}; "
                        "please request a new invitation",
                    )
                )

            now = self.now()
            if invitation.is_past_expiry(now):
                await self.uow.invitations.compare_and_set(
                    invitation.id,
                    InvitationStatus.pending,
                    expected_token_hash=token_hash,
                    status=InvitationStatus.expired,
                )
                await self.uow.commit()

                logger.info("Invitation %s expired at %s", invitation.id, invitation.expires_at)

                return Return.err(
                    Error(
                        "TOKEN_EXPIRED",
                        "This invitation has expired; please request a new invitation",
                    )
                )

            if not password or len(password) < self.min_password_length:
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        f"Password must be at least {self.min_password_length} characters long",
                    )
                )

            existing_user = await self.uow.users.get_by_email(invitation.email)
            if existing_user is not None:
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_REGISTERED",
                        "This email is already associated with an existing user",
                    )
                )

            if staff_id:
                taken = await self.uow.staff_profiles.get_by_staff_id(staff_id)
                if taken is not None:
                    return Return.err(
                        Error("STAFF_ID_TAKEN", "This staff ID is already registered")
                    )

            # Burn the token before creating anything
            claimed = await self.uow.invitations.compare_and_set(
                invitation.id,
                InvitationStatus.pending,
                expected_token_hash=token_hash,
                status=InvitationStatus.accepted,
                accepted_at=now,
            )
            if claimed is None:
                return Return.err(
                    Error(
                        "ALREADY_CONSUMED",
                        "This invitation has already been used",
                    )
                )

            user = User(
                email=invitation.email,
                role=invitation.role,
                status=UserStatus.active,
                first_name=first_name,
                middle_name=middle_name,
                last_name=last_name,
                password_hash=hash_password(password),
                created_at=now,
            )
            user = await self.uow.users.create(user)

            await self.uow.staff_profiles.create(
                OsasStaffProfile(
                    user_id=user.id,
                    staff_id=staff_id or None,
                    position=invitation.position,
                    department=invitation.department,
                )
            )

            await record_audit_event(
                self.uow,
                user_id=user.id,
                action="invitation_accepted",
                entity_type="invitation",
                entity_id=invitation.id,
                role=invitation.role,
                inviter_id=invitation.inviter_id,
            )

            await self.uow.commit()

            logger.info("Invitation %s accepted, created user %s", invitation.id, user.id)

            return Return.ok(
                AcceptInvitationResponse(
                    user_id=str(user.id),
                    email=user.email,
                    role=user.role.value,
                    invitation_id=str(invitation.id),
                    status=InvitationStatus.accepted.value,
                )
            )
