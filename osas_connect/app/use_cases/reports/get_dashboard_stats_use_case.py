"""
Get Dashboard Stats Use Case

Counts and recent activity for the admin and OSAS staff dashboards.
"""

from datetime import datetime
from typing import Callable
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.applications.dtos import ApplicationResponse
from osas_connect.app.use_cases.common import authorize
from osas_connect.app.use_cases.invitations.dtos import InvitationResponse
from osas_connect.domain.authorization import Action
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import ApplicationStatus, InvitationStatus
from osas_connect.libs.result import Result, Return

from .dtos import DashboardResponse, DashboardStats


class GetDashboardStatsUseCase:
    """
    Use case for the dashboard read surface.

    Business Rules:
    - Admins and OSAS staff only
    - "Pending" applications are those in status submitted
    - Pending invitations exclude ones past expiry (lazy expiry, no writes)
    - Success rate = approved / total, in whole percent
    - Recent lists hold the N newest applications and pending invitations
    """

    def __init__(
        self,
        uow: UnitOfWork,
        recent_limit: int = 10,
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.recent_limit = recent_limit
        self.now = now

    async def execute(self, actor_id: UUID) -> Result[DashboardResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.view_reports)
            if auth.is_err():
                return auth

            now = self.now()

            counts = await self.uow.applications.count_by_status()
            by_status = {status.value: counts.get(status, 0) for status in ApplicationStatus}
            total = sum(by_status.values())
            approved = by_status[ApplicationStatus.approved.value]

            funds = await self.uow.applications.sum_amount_received()
            pending_invitations = await self.uow.invitations.count_pending(now)

            recent_applications = await self.uow.applications.list(limit=self.recent_limit)
            recent_invitations = await self.uow.invitations.list(
                status=InvitationStatus.pending, now=now, limit=self.recent_limit
            )

            stats = DashboardStats(
                total_applications=total,
                applications_by_status=by_status,
                pending_applications=by_status[ApplicationStatus.submitted.value],
                approved_applications=approved,
                rejected_applications=by_status[ApplicationStatus.rejected.value],
                pending_invitations=pending_invitations,
                total_funds_allocated=str(funds),
                application_success_rate=round(approved * 100 / total) if total else 0,
            )

            return Return.ok(
                DashboardResponse(
                    stats=stats,
                    recent_applications=[
                        ApplicationResponse.from_entity(a) for a in recent_applications
                    ],
                    pending_invitations=[
                        InvitationResponse.from_entity(i, now) for i in recent_invitations
                    ],
                )
            )
