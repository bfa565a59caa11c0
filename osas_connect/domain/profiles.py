"""
Student profile normalization.

Profile data reaches the read path in two shapes: the current structured one,
where academic details sit under a nested "student_profile" (or camel-cased
"studentProfile") object, and the legacy flat one, where the same keys sit
on the user record itself. `normalize_student_profile` is the only place that
knows about both.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel

from .entities import StudentProfile, User

_NESTED_KEYS = ("student_profile", "studentProfile")
_ACADEMIC_FIELDS = ("student_id", "course", "major", "year_level")


class StudentSummary(BaseModel):
    """Canonical student view used by application detail responses"""

    user_id: Optional[str] = None
    full_name: str = ""
    email: Optional[str] = None
    student_id: Optional[str] = None
    course: Optional[str] = None
    major: Optional[str] = None
    year_level: Optional[str] = None


def _nested_profile(data: Mapping[str, Any]) -> Mapping[str, Any]:
    for key in _NESTED_KEYS:
        nested = data.get(key)
        if isinstance(nested, Mapping):
            return nested
    return {}


def normalize_student_profile(data: Mapping[str, Any]) -> StudentSummary:
    """Build a StudentSummary from either profile shape; nested values win."""
    nested = _nested_profile(data)

    academic = {}
    for field in _ACADEMIC_FIELDS:
        value = nested.get(field)
        if value is None:
            value = data.get(field)
        academic[field] = None if value is None else str(value)

    full_name = data.get("full_name") or " ".join(
        str(part)
        for part in (data.get("first_name"), data.get("middle_name"), data.get("last_name"))
        if part
    )

    user_id = data.get("user_id") or data.get("id")
    return StudentSummary(
        user_id=None if user_id is None else str(user_id),
        full_name=full_name,
        email=data.get("email"),
        **academic,
    )


def summarize_student(user: User, profile: Optional[StudentProfile]) -> StudentSummary:
    data: dict = {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "middle_name": user.middle_name,
        "last_name": user.last_name,
    }
    if profile is not None:
        data["student_profile"] = {
            field: getattr(profile, field) for field in _ACADEMIC_FIELDS
        }
    return normalize_student_profile(data)
