"""
Reject Application Use Case
"""

from typing import Optional
from uuid import UUID

from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import ApplicationStatus
from osas_connect.libs.result import Result

from .dtos import ApplicationResponse
from .transition import ApplicationTransitionUseCase


class RejectApplicationUseCase(ApplicationTransitionUseCase):
    """
    Use case for rejecting an application.

    Business Rules:
    - Only OSAS staff and admins may reject
    - Reachable from any non-terminal status
    - The reason is stored for audit only; it does not affect the workflow
    """

    async def execute(
        self, actor_id: UUID, application_id: UUID, reason: Optional[str] = None
    ) -> Result[ApplicationResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.reject_application)
            if auth.is_err():
                return auth

            loaded = await self._load(application_id)
            if loaded.is_err():
                return loaded

            return await self._apply(
                auth.value,
                loaded.value,
                ApplicationStatus.rejected,
                "application_rejected",
                extra_values={"rejection_reason": reason},
                audit_metadata={"reason": reason},
                notes=reason,
            )
