"""
ScholarshipApplication Entity

A student's application for one scholarship and its review status.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from osas_connect.domain.clock import utcnow

from .enums import ApplicationStatus

_OPEN_APPLICATION = text("status NOT IN ('approved', 'rejected')")


class ScholarshipApplication(SQLModel, table=True):
    """
    ScholarshipApplication entity.

    Business Rules:
    - Created by the owning student in status submitted
    - Status only moves forward along the review chain
    - Exactly one of approved_at / rejected_at is set once terminal
    - amount_received is set if and only if status is approved
    - reviewer_notes holds the note left with the latest review step, if any
    - Never deleted; history is kept through status and audit events
    - One open (non-terminal) application per student and scholarship
    """

    __tablename__ = "scholarship_applications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    student_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    scholarship_id: UUID = Field(
        foreign_key="scholarships.id", nullable=False, index=True
    )
    reviewer_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    status: ApplicationStatus = Field(default=ApplicationStatus.submitted)

    amount_received: Optional[Decimal] = Field(
        default=None, max_digits=12, decimal_places=2
    )
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)
    reviewer_notes: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    applied_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    approved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejected_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_application_status", "status"),
        Index("idx_application_applied_at", "applied_at"),
        Index(
            "uq_application_open_per_scholarship",
            "student_id",
            "scholarship_id",
            unique=True,
            sqlite_where=_OPEN_APPLICATION,
            postgresql_where=_OPEN_APPLICATION,
        ),
    )
