from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.domain.entities import AuditEvent


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    return value


async def record_audit_event(
    uow: UnitOfWork,
    user_id: Optional[UUID],
    action: str,
    entity_type: str,
    entity_id: UUID,
    **metadata: Any,
) -> AuditEvent:
    """Add an audit event to the current unit of work (committed with it)"""
    audit = AuditEvent(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        event_metadata={key: _jsonable(value) for key, value in metadata.items()},
    )
    return await uow.audit_events.create(audit)
