"""
Authorization Gate

Single source of truth for which role may perform which action. Every
mutating use case consults `can_perform` before touching storage.

Rules:
- admin: every review and invitation action, but not submitting; may
  delete staff and students but never another admin (nor themselves)
- osas_staff: advance/approve/reject/assign reviewer, view any application,
  invite/resend/revoke staff invitations (not admin invitations), reports
- student: submit and view their own applications only
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from .entities.enums import UserRole


class Action(str, Enum):
    submit_application = "submit_application"
    view_application = "view_application"
    list_applications = "list_applications"
    advance_application = "advance_application"
    approve_application = "approve_application"
    reject_application = "reject_application"
    assign_reviewer = "assign_reviewer"
    invite_staff = "invite_staff"
    resend_invitation = "resend_invitation"
    revoke_invitation = "revoke_invitation"
    view_invitations = "view_invitations"
    delete_user = "delete_user"
    view_reports = "view_reports"
    view_audit_log = "view_audit_log"


_REVIEW_ACTIONS = frozenset(
    {
        Action.view_application,
        Action.list_applications,
        Action.advance_application,
        Action.approve_application,
        Action.reject_application,
        Action.assign_reviewer,
    }
)

_INVITATION_ACTIONS = frozenset(
    {
        Action.invite_staff,
        Action.resend_invitation,
        Action.revoke_invitation,
        Action.view_invitations,
    }
)

_OWNED_STUDENT_ACTIONS = frozenset(
    {Action.submit_application, Action.view_application}
)


def can_perform(
    actor_role: UserRole,
    action: Action,
    target_owner_id: Optional[UUID] = None,
    actor_id: Optional[UUID] = None,
    target_role: Optional[UserRole] = None,
) -> bool:
    """
    Decide whether `actor_role` may perform `action`.

    Args:
        actor_role: Role of the acting user (loaded from storage, not the token)
        action: Action being attempted
        target_owner_id: Owner of the target entity (student id for applications,
            the user id itself for user actions)
        actor_id: Id of the acting user, needed for ownership checks
        target_role: Role of the target user, or the role being invited

    Returns:
        True if allowed. Callers must turn False into a FORBIDDEN error.
    """
    if actor_role == UserRole.admin:
        if action == Action.submit_application:
            return False
        if action == Action.delete_user:
            if target_role == UserRole.admin:
                return False
            if target_owner_id is not None and target_owner_id == actor_id:
                return False
        return True

    if actor_role == UserRole.osas_staff:
        if action in _REVIEW_ACTIONS or action == Action.view_reports:
            return True
        if action in _INVITATION_ACTIONS:
            return target_role != UserRole.admin
        return False

    if actor_role == UserRole.student:
        if action == Action.list_applications:
            return True
        if action in _OWNED_STUDENT_ACTIONS:
            return actor_id is not None and target_owner_id == actor_id
        return False

    return False
