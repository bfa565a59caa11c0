import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.app.repositories.audit_event_repository import IAuditEventRepository
from osas_connect.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_paginated(
        self,
        entity_type: Optional[str] = None,
        entity_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events with cursor-based pagination.

        Cursor format: base64-encoded ISO timestamp of created_at
        """
        stmt = select(AuditEvent)
        if entity_type is not None:
            stmt = stmt.where(AuditEvent.entity_type == entity_type)
        if entity_id is not None:
            stmt = stmt.where(AuditEvent.entity_id == entity_id)

        if cursor:
            try:
                cursor_timestamp_str = base64.b64decode(cursor).decode("utf-8")
                cursor_timestamp = datetime.fromisoformat(cursor_timestamp_str)
                stmt = stmt.where(AuditEvent.created_at < cursor_timestamp)
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(AuditEvent.created_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            cursor_timestamp_str = events[-1].created_at.isoformat()
            next_cursor = base64.b64encode(cursor_timestamp_str.encode("utf-8")).decode("utf-8")

        return events, next_cursor
