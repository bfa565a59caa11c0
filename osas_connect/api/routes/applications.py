"""
Application API Routes

Scholarship application submission, review workflow and reads.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from osas_connect.api.error import raise_for_error
from osas_connect.api.utils.ids import parse_uuid
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.applications import (
    AdvanceApplicationUseCase,
    ApplicationDetailResponse,
    ApplicationListResponse,
    ApplicationResponse,
    ApproveApplicationUseCase,
    AssignReviewerUseCase,
    GetApplicationUseCase,
    ListApplicationsUseCase,
    RejectApplicationUseCase,
    SubmitApplicationUseCase,
)
from osas_connect.depends import get_current_user, get_notification_dispatcher, get_unit_of_work

router = APIRouter(prefix="/applications", tags=["Applications"])


class SubmitApplicationRequest(BaseModel):
    scholarship_id: str = Field(..., description="Scholarship to apply for")


class AdvanceApplicationRequest(BaseModel):
    status: str = Field(..., description="Target status, the next step of the chain or rejected")
    notes: Optional[str] = Field(None, max_length=1000, description="Reviewer notes for this step")


class ApproveApplicationRequest(BaseModel):
    amount: str = Field(..., description="Amount awarded, positive with at most 2 decimal places")


class RejectApplicationRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class AssignReviewerRequest(BaseModel):
    reviewer_id: str


def _application_id(application_id: str) -> UUID:
    return parse_uuid(application_id, "INVALID_APPLICATION_ID", "application ID")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
async def submit_application(
    request: SubmitApplicationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Submit Application

    Creates an application in status submitted for the calling student.

    Raises:
        - 403 Forbidden: caller is not an active student
        - 404 Not Found: SCHOLARSHIP_NOT_FOUND
        - 409 Conflict: DUPLICATE_APPLICATION
    """
    user_id = UUID(current_user["user_id"])
    scholarship_id = parse_uuid(request.scholarship_id, "INVALID_SCHOLARSHIP_ID", "scholarship ID")

    result = await SubmitApplicationUseCase(uow, dispatcher).execute(user_id, scholarship_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ApplicationListResponse)
async def list_applications(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    status_filter: Optional[str] = Query(None, alias="status"),
    scholarship_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """
    List Applications

    Staff and admins see every application; students only their own.
    """
    user_id = UUID(current_user["user_id"])

    result = await ListApplicationsUseCase(uow).execute(
        user_id,
        status=status_filter,
        scholarship_id=(
            parse_uuid(scholarship_id, "INVALID_SCHOLARSHIP_ID", "scholarship ID")
            if scholarship_id
            else None
        ),
        student_id=(
            parse_uuid(student_id, "INVALID_USER_ID", "student ID") if student_id else None
        ),
        limit=limit,
        offset=offset,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{application_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationDetailResponse,
)
async def get_application(
    application_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    user_id = UUID(current_user["user_id"])

    result = await GetApplicationUseCase(uow).execute(user_id, _application_id(application_id))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{application_id}/advance",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationResponse,
)
async def advance_application(
    application_id: str,
    request: AdvanceApplicationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Advance Application

    Moves an application one step along the review chain (or to rejected).
    Approval goes through /approve because it needs an amount.

    Raises:
        - 403 Forbidden: caller is not staff/admin
        - 404 Not Found: APPLICATION_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION (skip, backwards, terminal, lost race)
        - 422 Unprocessable Entity: INVALID_STATUS, INVALID_AMOUNT
    """
    user_id = UUID(current_user["user_id"])

    result = await AdvanceApplicationUseCase(uow, dispatcher).execute(
        user_id, _application_id(application_id), request.status, notes=request.notes
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{application_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationResponse,
)
async def approve_application(
    application_id: str,
    request: ApproveApplicationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    user_id = UUID(current_user["user_id"])

    result = await ApproveApplicationUseCase(uow, dispatcher).execute(
        user_id, _application_id(application_id), request.amount
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{application_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationResponse,
)
async def reject_application(
    application_id: str,
    request: RejectApplicationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    user_id = UUID(current_user["user_id"])

    result = await RejectApplicationUseCase(uow, dispatcher).execute(
        user_id, _application_id(application_id), request.reason
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/{application_id}/reviewer",
    status_code=status.HTTP_200_OK,
    response_model=ApplicationResponse,
)
async def assign_reviewer(
    application_id: str,
    request: AssignReviewerRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    user_id = UUID(current_user["user_id"])
    reviewer_id = parse_uuid(request.reviewer_id, "INVALID_USER_ID", "reviewer ID")

    result = await AssignReviewerUseCase(uow).execute(
        user_id, _application_id(application_id), reviewer_id
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
