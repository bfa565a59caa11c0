"""
Invitation API Routes

Staff invitation issue, resend, revoke, preview and acceptance.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from osas_connect.api.error import raise_for_error
from osas_connect.api.utils.ids import parse_uuid
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    InvitationListResponse,
    InvitationPreviewResponse,
    InviteStaffResponse,
    InviteStaffUseCase,
    ListInvitationsUseCase,
    PreviewInvitationUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
)
from osas_connect.depends import get_current_user, get_notification_dispatcher, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class InviteStaffRequest(BaseModel):
    """
    Invite staff HTTP request payload

    Validates incoming request for inviting a new OSAS staff member or admin.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("osas_staff", description="Role to assign (osas_staff or admin)")
    position: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    Carries the token from the email link and the new account's details.
    """

    token: str = Field(..., description="Invitation token")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    password: str = Field(..., description="Password for the new account")
    staff_id: Optional[str] = Field(None, max_length=50)


def _invitation_ttl() -> timedelta:
    return timedelta(days=ApplicationConfig.INVITATION_TTL_DAYS)


def _invitation_id(invitation_id: str) -> UUID:
    return parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InviteStaffResponse)
async def invite_staff(
    request: InviteStaffRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Invite Staff

    Issues a single-use invitation and emails the accept link.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: caller is not staff/admin, or staff inviting an admin
        - 409 Conflict: ALREADY_INVITED, ALREADY_STAFF, EMAIL_ALREADY_REGISTERED
        - 422 Unprocessable Entity: INVALID_ROLE
    """
    user_id = UUID(current_user["user_id"])

    use_case = InviteStaffUseCase(
        uow, dispatcher, ApplicationConfig.APP_BASE_URL, ttl=_invitation_ttl()
    )
    result = await use_case.execute(
        user_id,
        request.email,
        role=request.role,
        position=request.position,
        department=request.department,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=InvitationListResponse)
async def list_invitations(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    user_id = UUID(current_user["user_id"])

    result = await ListInvitationsUseCase(uow).execute(
        user_id, status=status_filter, limit=limit, offset=offset
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=InvitationPreviewResponse,
)
async def preview_invitation(
    token: str = Query(..., description="Invitation token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Preview Invitation

    Shows who was invited and for which role before the form is submitted.
    Read only: an expired invitation is reported but not written.

    Raises:
        - 404 Not Found: TOKEN_NOT_FOUND
        - 409 Conflict: ALREADY_CONSUMED
        - 410 Gone: TOKEN_EXPIRED
    """
    result = await PreviewInvitationUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    Creates the staff account with the invited role. The token is consumed.

    Raises:
        - 404 Not Found: TOKEN_NOT_FOUND
        - 409 Conflict: ALREADY_CONSUMED, EMAIL_ALREADY_REGISTERED, STAFF_ID_TAKEN
        - 410 Gone: TOKEN_EXPIRED
        - 422 Unprocessable Entity: INVALID_PASSWORD
    """
    use_case = AcceptInvitationUseCase(
        uow, min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH
    )
    result = await use_case.execute(
        request.token,
        request.first_name,
        request.last_name,
        request.password,
        middle_name=request.middle_name,
        staff_id=request.staff_id,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Resend Invitation

    Rotates the token of a pending invitation and restarts its expiry window.

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 403 Forbidden: caller is not allowed to manage this invitation
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: ALREADY_CONSUMED
    """
    user_id = UUID(current_user["user_id"])

    use_case = ResendInvitationUseCase(
        uow, dispatcher, ApplicationConfig.APP_BASE_URL, ttl=_invitation_ttl()
    )
    result = await use_case.execute(user_id, _invitation_id(invitation_id))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInvitationResponse,
)
async def revoke_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invitation

    Revokes a pending invitation. Revoking twice is a no-op.

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 403 Forbidden: caller is not allowed to manage this invitation
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: ALREADY_CONSUMED
    """
    user_id = UUID(current_user["user_id"])

    result = await RevokeInvitationUseCase(uow).execute(user_id, _invitation_id(invitation_id))
    if result.is_err():
        raise_for_error(result.error)
    return result.value
