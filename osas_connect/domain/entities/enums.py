"""
OSAS Connect Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Portal role, fixed when the user is created"""

    student = "student"
    osas_staff = "osas_staff"
    admin = "admin"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class ApplicationStatus(str, Enum):
    """Scholarship application status, in workflow order"""

    submitted = "submitted"
    under_verification = "under_verification"
    verified = "verified"
    under_evaluation = "under_evaluation"
    approved = "approved"
    rejected = "rejected"


class InvitationStatus(str, Enum):
    """Staff invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    revoked = "revoked"
