"""
AuditEvent Entity

Immutable log of workflow and account actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from osas_connect.domain.clock import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of status changes and account actions.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id is the acting user; None for anonymous actions (invitation acceptance
      is attributed to the newly created user)
    - entity_type/entity_id point at the application, invitation or user acted on
    - Metadata stores previous/new status and action specific context
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "application_approved"
    entity_type: str = Field(max_length=50)  # "application", "invitation", "user"
    entity_id: UUID = Field(nullable=False)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_entity", "entity_type", "entity_id"),
    )
