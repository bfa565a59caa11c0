from uuid import UUID

from fastapi import APIRouter, Depends, status

from osas_connect.api.error import raise_for_error
from osas_connect.api.utils.ids import parse_uuid
from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.app.use_cases.users import DeleteUserResponse, DeleteUserUseCase
from osas_connect.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/users", tags=["Users"])


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(
    user_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User

    Disables a student or staff account. Admin only; admins cannot be deleted.

    Raises:
        - 403 Forbidden: caller is not an admin, target is an admin or the caller
        - 404 Not Found: USER_NOT_FOUND
    """
    actor_id = UUID(current_user["user_id"])
    target_id = parse_uuid(user_id, "INVALID_USER_ID", "user ID")

    result = await DeleteUserUseCase(uow).execute(actor_id, target_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
