"""
Shared status transition logic for the review workflow.

Every transition re-validates the chain against the stored status and then
applies the change with a compare-and-set on that status, so of two racing
reviewers exactly one succeeds and the other gets INVALID_TRANSITION.
Once committed, the student is emailed about the new status.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.domain.application_status import can_transition
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import ApplicationStatus, ScholarshipApplication, User
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationResponse
from .notify import build_status_notification, dispatch_status_change

logger = logging.getLogger(__name__)

# Timestamp column stamped when a status is reached
_STATUS_TIMESTAMPS = {
    ApplicationStatus.verified: "verified_at",
    ApplicationStatus.approved: "approved_at",
    ApplicationStatus.rejected: "rejected_at",
}


def invalid_transition(
    current: ApplicationStatus, target: ApplicationStatus
) -> Result:
    return Return.err(
        Error(
            "INVALID_TRANSITION",
            f"Cannot move application from {current.value} to {target.value}",
        )
    )


class ApplicationTransitionUseCase:
    """Base class for use cases that move an application along the chain"""

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: NotificationDispatcher,
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.now = now

    async def _load(self, application_id: UUID) -> Result[ScholarshipApplication]:
        application = await self.uow.applications.get_by_id(application_id)
        if application is None:
            return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))
        return Return.ok(application)

    async def _apply(
        self,
        actor: User,
        application: ScholarshipApplication,
        target: ApplicationStatus,
        audit_action: str,
        extra_values: Optional[Dict[str, Any]] = None,
        audit_metadata: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
    ) -> Result[ApplicationResponse]:
        current = application.status
        if not can_transition(current, target):
            return invalid_transition(current, target)

        changed_at = self.now()
        values: Dict[str, Any] = {"status": target}
        if target in _STATUS_TIMESTAMPS:
            values[_STATUS_TIMESTAMPS[target]] = changed_at
        values.update(extra_values or {})

        updated = await self.uow.applications.compare_and_set(
            application.id, current, **values
        )
        if updated is None:
            return Return.err(
                Error(
                    "INVALID_TRANSITION",
                    "Application status changed since it was loaded",
                    reason=f"Expected status {current.value}",
                )
            )

        await record_audit_event(
            self.uow,
            user_id=actor.id,
            action=audit_action,
            entity_type="application",
            entity_id=application.id,
            previous_status=current,
            new_status=target,
            **(audit_metadata or {}),
        )

        student = await self.uow.users.get_by_id(updated.student_id)

        await self.uow.commit()

        logger.info(
            "Application %s moved from %s to %s by %s",
            application.id,
            current.value,
            target.value,
            actor.id,
        )

        response = ApplicationResponse.from_entity(updated)

        if student is not None:
            payload = build_status_notification(updated, current, changed_at, notes)
            await dispatch_status_change(self.dispatcher, [student.email], payload)

        return Return.ok(response)
