"""
Advance Application Use Case

Moves an application one step along the review chain.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.application_status import can_transition
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import ApplicationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationResponse
from .transition import ApplicationTransitionUseCase, invalid_transition


class AdvanceApplicationUseCase(ApplicationTransitionUseCase):
    """
    Use case for advancing an application.

    Business Rules:
    - Only OSAS staff and admins may advance
    - Target must be the single successor of the current status, or rejected
    - Approval needs an amount, so advancing to approved goes through approve
    - Non-adjacent targets fail with INVALID_TRANSITION, never clamped
    - Optional reviewer notes are stored on the application, written to the
      audit event and passed on in the student email
    """

    async def execute(
        self,
        actor_id: UUID,
        application_id: UUID,
        target_status: str,
        notes: Optional[str] = None,
    ) -> Result[ApplicationResponse]:
        """
        Execute advance application use case.

        Args:
            actor_id: Acting staff/admin user ID
            application_id: Application to move
            target_status: Requested next status
            notes: Reviewer notes for this step

        Returns:
            Result with ApplicationResponse DTO, or Error
        """
        async with self.uow:
            try:
                target = ApplicationStatus(target_status)
            except ValueError:
                return Return.err(
                    Error("INVALID_STATUS", f"Unknown application status: {target_status}")
                )

            action = (
                Action.reject_application
                if target == ApplicationStatus.rejected
                else Action.advance_application
            )
            auth = await authorize(self.uow, actor_id, action)
            if auth.is_err():
                return auth
            actor = auth.value

            loaded = await self._load(application_id)
            if loaded.is_err():
                return loaded
            application = loaded.value

            if not can_transition(application.status, target):
                return invalid_transition(application.status, target)

            if target == ApplicationStatus.approved:
                return Return.err(
                    Error(
                        "INVALID_AMOUNT",
                        "Approving an application requires an amount",
                    )
                )

            audit_action = (
                "application_rejected"
                if target == ApplicationStatus.rejected
                else "application_advanced"
            )
            extra_values: Dict[str, Any] = {}
            audit_metadata: Dict[str, Any] = {}
            if notes:
                extra_values["reviewer_notes"] = notes
                audit_metadata["notes"] = notes

            return await self._apply(
                actor,
                application,
                target,
                audit_action,
                extra_values=extra_values,
                audit_metadata=audit_metadata,
                notes=notes or None,
            )
