"""
Get Audit Events Use Case

Retrieves workflow and account audit events with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.libs.result import Result, Return


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - Caller must be an active admin
    - Optionally scoped to one entity (e.g. one application's history)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes action, user_email, entity, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        entity_type: Optional[str] = None,
        entity_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            actor_id: User UUID from JWT
            entity_type: Restrict to "application", "invitation" or "user"
            entity_id: Restrict to one entity
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.view_audit_log)
            if auth.is_err():
                return auth

            events, next_cursor = await self.uow.audit_events.get_paginated(
                entity_type=entity_type, entity_id=entity_id, limit=limit, cursor=cursor
            )

            # Resolve each actor once
            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    if event.user_id not in emails:
                        user = await self.uow.users.get_by_id(event.user_id)
                        emails[event.user_id] = user.email if user else None
                    user_email = emails[event.user_id]

                events_list.append(
                    {
                        "action": event.action,
                        "user_email": user_email,
                        "entity_type": event.entity_type,
                        "entity_id": str(event.entity_id),
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
