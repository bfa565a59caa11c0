"""
Profile Entities

Role-specific details attached to a User.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from osas_connect.domain.clock import utcnow


class StudentProfile(SQLModel, table=True):
    """Academic details of a student user (one per user)"""

    __tablename__ = "student_profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    student_id: Optional[str] = Field(default=None, max_length=50)
    course: Optional[str] = Field(default=None, max_length=255)
    major: Optional[str] = Field(default=None, max_length=255)
    year_level: Optional[str] = Field(default=None, max_length=50)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class OsasStaffProfile(SQLModel, table=True):
    """Employment details of an OSAS staff or admin user (one per user)"""

    __tablename__ = "osas_staff_profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    staff_id: Optional[str] = Field(default=None, max_length=50, unique=True)
    position: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
