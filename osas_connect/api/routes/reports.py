from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from osas_connect.api.error import raise_for_error
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.reports import DashboardResponse, GetDashboardStatsUseCase
from osas_connect.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", status_code=status.HTTP_200_OK, response_model=DashboardResponse)
async def get_dashboard(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Dashboard Stats

    Application counts, funds allocated, pending invitations and recent activity.
    Only accessible by admins and OSAS staff.
    """
    user_id = UUID(current_user["user_id"])

    use_case = GetDashboardStatsUseCase(
        uow, recent_limit=ApplicationConfig.RECENT_ACTIVITY_LIMIT
    )
    result = await use_case.execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
