"""
Submit Application Use Case

Handles a student applying for a scholarship.
"""

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from osas_connect.app.repositories.application_repository import DuplicateOpenApplication
from osas_connect.app.services.audit import record_audit_event
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import ApplicationStatus, ScholarshipApplication, UserRole
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationResponse
from .notify import build_status_notification, dispatch_status_change

logger = logging.getLogger(__name__)


class SubmitApplicationUseCase:
    """
    Use case for submitting a scholarship application.

    Business Rules:
    - Only a student may submit, and only for themselves
    - Scholarship must exist
    - At most one open (non-terminal) application per student and scholarship
    - New applications start in status submitted with applied_at = now
    - Creates audit event
    - After commit, the student and every active OSAS staff member are emailed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: NotificationDispatcher,
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.now = now

    async def execute(
        self, student_id: UUID, scholarship_id: UUID
    ) -> Result[ApplicationResponse]:
        """
        Execute submit application use case.

        Args:
            student_id: Acting student's user ID
            scholarship_id: Scholarship being applied for

        Returns:
            Result with ApplicationResponse DTO, or Error
        """
        async with self.uow:
            auth = await authorize(
                self.uow, student_id, Action.submit_application, target_owner_id=student_id
            )
            if auth.is_err():
                return auth

            scholarship = await self.uow.scholarships.get_by_id(scholarship_id)
            if scholarship is None:
                return Return.err(
                    Error("SCHOLARSHIP_NOT_FOUND", "Scholarship not found")
                )

            duplicate = Return.err(
                Error(
                    "DUPLICATE_APPLICATION",
                    "You already have an open application for this scholarship",
                )
            )

            existing = await self.uow.applications.get_open_by_student_and_scholarship(
                student_id, scholarship_id
            )
            if existing is not None:
                return duplicate

            application = ScholarshipApplication(
                student_id=student_id,
                scholarship_id=scholarship_id,
                status=ApplicationStatus.submitted,
                applied_at=self.now(),
            )
            try:
                application = await self.uow.applications.create(application)
            except DuplicateOpenApplication:
                # Lost a race against a concurrent submission
                return duplicate

            await record_audit_event(
                self.uow,
                user_id=student_id,
                action="application_submitted",
                entity_type="application",
                entity_id=application.id,
                scholarship_id=scholarship_id,
                new_status=ApplicationStatus.submitted,
            )

            staff_emails = await self.uow.users.list_active_emails(UserRole.osas_staff)

            await self.uow.commit()

            logger.info(
                "Application %s submitted by student %s for scholarship %s",
                application.id,
                student_id,
                scholarship_id,
            )

            response = ApplicationResponse.from_entity(application)

            recipients = [auth.value.email, *staff_emails]
            payload = build_status_notification(application, None, application.applied_at)

        await dispatch_status_change(self.dispatcher, recipients, payload)

        return Return.ok(response)
