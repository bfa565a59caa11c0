"""
Application Use Case DTOs (Data Transfer Objects)

Response classes for the scholarship application workflow.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from osas_connect.domain.entities import ScholarshipApplication
from osas_connect.domain.profiles import StudentSummary


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ============================================================================
# Response DTOs
# ============================================================================


class ApplicationResponse(BaseModel):
    """One scholarship application"""

    id: str
    student_id: str
    scholarship_id: str
    status: str
    reviewer_id: Optional[str] = None
    applied_at: str
    verified_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    amount_received: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewer_notes: Optional[str] = None

    @classmethod
    def from_entity(cls, application: ScholarshipApplication) -> "ApplicationResponse":
        return cls(
            id=str(application.id),
            student_id=str(application.student_id),
            scholarship_id=str(application.scholarship_id),
            status=application.status.value,
            reviewer_id=str(application.reviewer_id) if application.reviewer_id else None,
            applied_at=application.applied_at.isoformat(),
            verified_at=_iso(application.verified_at),
            approved_at=_iso(application.approved_at),
            rejected_at=_iso(application.rejected_at),
            amount_received=(
                str(application.amount_received)
                if application.amount_received is not None
                else None
            ),
            rejection_reason=application.rejection_reason,
            reviewer_notes=application.reviewer_notes,
        )


class ApplicationDetailResponse(BaseModel):
    """Application with the owning student's normalized profile"""

    application: ApplicationResponse
    student: StudentSummary
    scholarship_name: Optional[str] = None
    allowed_transitions: List[str]


class ApplicationListResponse(BaseModel):
    """Filtered list of applications"""

    items: List[ApplicationResponse]
    count: int
    filters: Dict[str, Optional[str]]
