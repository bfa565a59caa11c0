"""
OSAS Connect Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ApplicationStatus,
    InvitationStatus,
    UserRole,
    UserStatus,
)

# Export all entities
from .user import User
from .profiles import OsasStaffProfile, StudentProfile
from .scholarship import Scholarship
from .scholarship_application import ScholarshipApplication
from .staff_invitation import StaffInvitation
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    "ApplicationStatus",
    "InvitationStatus",
    # Entities
    "User",
    "StudentProfile",
    "OsasStaffProfile",
    "Scholarship",
    "ScholarshipApplication",
    "StaffInvitation",
    "AuditEvent",
]
