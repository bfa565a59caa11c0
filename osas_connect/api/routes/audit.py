"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from osas_connect.api.error import raise_for_error
from osas_connect.api.utils.ids import parse_uuid
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.audit import GetAuditEventsUseCase
from osas_connect.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    user_email: Optional[str]
    entity_type: str
    entity_id: str
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    entity_type: Optional[str] = Query(None, description="application, invitation or user"),
    entity_id: Optional[str] = Query(None, description="Restrict to one entity"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Events

    Returns workflow and account audit logs, newest first.
    Only accessible by admins.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: caller is not an active admin
    """
    user_id = UUID(current_user["user_id"])

    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(
        actor_id=user_id,
        entity_type=entity_type,
        entity_id=parse_uuid(entity_id, "INVALID_ENTITY_ID", "entity ID") if entity_id else None,
        limit=limit,
        cursor=cursor,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
