"""
Delete User Use Case

Handles removing (soft delete) student and staff accounts.
"""

import logging
from uuid import UUID

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize, forbidden
from osas_connect.domain.authorization import Action, can_perform
from osas_connect.domain.entities import UserStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting users.

    Business Rules:
    - Only admins can delete users
    - Admins cannot delete other admins, nor themselves
    - Soft delete: status=disabled; applications and invitations keep
      referencing the row
    - Creates audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, target_user_id: UUID) -> Result[DeleteUserResponse]:
        """
        Execute delete user use case.

        Args:
            actor_id: User ID of the admin deleting the account
            target_user_id: User ID of the account to delete

        Returns:
            Result with DeleteUserResponse DTO, or Error
        """
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.delete_user)
            if auth.is_err():
                return auth
            actor = auth.value

            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not can_perform(
                actor.role,
                Action.delete_user,
                target_owner_id=target.id,
                actor_id=actor.id,
                target_role=target.role,
            ):
                return forbidden("Admins cannot delete admin accounts or themselves")

            if target.status != UserStatus.disabled:
                target.status = UserStatus.disabled
                await self.uow.users.update(target)

                await record_audit_event(
                    self.uow,
                    user_id=actor.id,
                    action="user_deleted",
                    entity_type="user",
                    entity_id=target.id,
                    role=target.role,
                    email=target.email,
                )

                await self.uow.commit()

                logger.info("User %s disabled by %s", target.id, actor.id)

            return Return.ok(
                DeleteUserResponse(user_id=str(target.id), status=UserStatus.disabled.value)
            )
