"""
List Applications Use Case

Filtered application list for tables and dashboards. Students only ever
see their own applications.
"""

from typing import Optional
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import ApplicationStatus, UserRole
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationListResponse, ApplicationResponse


class ListApplicationsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        status: Optional[str] = None,
        scholarship_id: Optional[UUID] = None,
        student_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ApplicationListResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.list_applications)
            if auth.is_err():
                return auth
            actor = auth.value

            status_filter = None
            if status is not None:
                try:
                    status_filter = ApplicationStatus(status)
                except ValueError:
                    return Return.err(
                        Error("INVALID_STATUS", f"Unknown application status: {status}")
                    )

            if actor.role == UserRole.student:
                student_id = actor.id

            applications = await self.uow.applications.list(
                status=status_filter,
                student_id=student_id,
                scholarship_id=scholarship_id,
                limit=limit,
                offset=offset,
            )

            return Return.ok(
                ApplicationListResponse(
                    items=[ApplicationResponse.from_entity(a) for a in applications],
                    count=len(applications),
                    filters={
                        "status": status_filter.value if status_filter else None,
                        "scholarship_id": str(scholarship_id) if scholarship_id else None,
                        "student_id": str(student_id) if student_id else None,
                    },
                )
            )
