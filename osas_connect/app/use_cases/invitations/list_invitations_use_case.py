"""
List Invitations Use Case

Invitation table for the staff management page. Status is the effective
status: a pending invitation past expiry is listed as expired.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.clock import utcnow
from osas_connect.domain.entities import InvitationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import InvitationListResponse, InvitationResponse


class ListInvitationsUseCase:
    def __init__(self, uow: UnitOfWork, now: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.now = now

    async def execute(
        self,
        actor_id: UUID,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[InvitationListResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.view_invitations)
            if auth.is_err():
                return auth

            status_filter = None
            if status is not None:
                try:
                    status_filter = InvitationStatus(status)
                except ValueError:
                    return Return.err(
                        Error("INVALID_STATUS", f"Unknown invitation status: {status}")
                    )

            now = self.now()
            invitations = await self.uow.invitations.list(
                status=status_filter, now=now, limit=limit, offset=offset
            )

            items = [InvitationResponse.from_entity(i, now) for i in invitations]
            return Return.ok(InvitationListResponse(items=items, count=len(items)))
