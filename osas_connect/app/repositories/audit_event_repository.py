from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from osas_connect.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_paginated(
        self,
        entity_type: Optional[str] = None,
        entity_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events with cursor-based pagination.

        Returns:
            Tuple of (events list, next_cursor)
            - events: List of audit events ordered by created_at DESC
            - next_cursor: Cursor for next page, None if no more events
        """
        pass
