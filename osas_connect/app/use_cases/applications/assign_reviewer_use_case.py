"""
Assign Reviewer Use Case

Sets the staff member responsible for evaluating an application.
"""

import logging
from uuid import UUID

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.application_status import is_terminal
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import UserRole
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationResponse

logger = logging.getLogger(__name__)

_REVIEWER_ROLES = (UserRole.osas_staff, UserRole.admin)


class AssignReviewerUseCase:
    """
    Use case for assigning a reviewer to an application.

    Business Rules:
    - Only OSAS staff and admins may assign reviewers
    - Allowed at any non-terminal status; status itself is unchanged
    - Reviewer must be an active OSAS staff member or admin
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, application_id: UUID, reviewer_id: UUID
    ) -> Result[ApplicationResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.assign_reviewer)
            if auth.is_err():
                return auth

            application = await self.uow.applications.get_by_id(application_id)
            if application is None:
                return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

            current = application.status
            if is_terminal(current):
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        f"Cannot assign a reviewer to a {current.value} application",
                    )
                )

            reviewer = await self.uow.users.get_by_id(reviewer_id)
            if (
                reviewer is None
                or not reviewer.is_active
                or reviewer.role not in _REVIEWER_ROLES
            ):
                return Return.err(
                    Error(
                        "REVIEWER_NOT_STAFF",
                        "Reviewer must be an active OSAS staff member or admin",
                    )
                )

            previous_reviewer_id = application.reviewer_id

            # Guard on status so a concurrent approve/reject wins cleanly
            updated = await self.uow.applications.compare_and_set(
                application.id, current, reviewer_id=reviewer.id
            )
            if updated is None:
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        "Application status changed since it was loaded",
                    )
                )

            await record_audit_event(
                self.uow,
                user_id=actor_id,
                action="reviewer_assigned",
                entity_type="application",
                entity_id=application.id,
                previous_reviewer_id=previous_reviewer_id,
                reviewer_id=reviewer.id,
            )

            await self.uow.commit()

            logger.info("Reviewer %s assigned to application %s", reviewer.id, application.id)

            return Return.ok(ApplicationResponse.from_entity(updated))
