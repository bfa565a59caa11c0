"""
User Entity

A person with exactly one portal role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from osas_connect.domain.clock import utcnow

from .enums import UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - student, OSAS staff member or admin.

    Business Rules:
    - Email must be unique across all users
    - Role is set at registration or invitation acceptance and never changes
    - Deleting a user disables it; rows are kept for application history
    - Password stored as bcrypt hash
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    role: UserRole = Field(nullable=False)
    status: UserStatus = Field(default=UserStatus.active)

    first_name: str = Field(default="", max_length=255)
    middle_name: Optional[str] = Field(default=None, max_length=255)
    last_name: str = Field(default="", max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role_status", "role", "status"),)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active
