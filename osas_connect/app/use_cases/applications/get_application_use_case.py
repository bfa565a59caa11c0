"""
Get Application Use Case

Per-application detail view for students (own only) and staff.
"""

from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.application_status import legal_targets
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import ApplicationStatus
from osas_connect.domain.profiles import StudentSummary, summarize_student
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationDetailResponse, ApplicationResponse


class GetApplicationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, application_id: UUID
    ) -> Result[ApplicationDetailResponse]:
        async with self.uow:
            application = await self.uow.applications.get_by_id(application_id)
            if application is None:
                return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

            auth = await authorize(
                self.uow,
                actor_id,
                Action.view_application,
                target_owner_id=application.student_id,
            )
            if auth.is_err():
                return auth

            student = await self.uow.users.get_by_id(application.student_id)
            if student is not None:
                profile = await self.uow.student_profiles.get_by_user_id(student.id)
                summary = summarize_student(student, profile)
            else:
                summary = StudentSummary(user_id=str(application.student_id))

            scholarship = await self.uow.scholarships.get_by_id(application.scholarship_id)

            # Ordered as the UI renders the action buttons
            order = list(ApplicationStatus)
            allowed = sorted(legal_targets(application.status), key=order.index)

            return Return.ok(
                ApplicationDetailResponse(
                    application=ApplicationResponse.from_entity(application),
                    student=summary,
                    scholarship_name=scholarship.name if scholarship else None,
                    allowed_transitions=[status.value for status in allowed],
                )
            )
