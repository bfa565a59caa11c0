"""
Helpers shared by the use cases.

The actor's role is always re-read from storage; a role carried by the
caller's token is never trusted for authorization.
"""

from typing import Optional
from uuid import UUID

from osas_connect.app.services.unit_of_work import UnitOfWork
from osas_connect.domain.authorization import Action, can_perform
from osas_connect.domain.entities import User, UserRole
from osas_connect.libs.result import Error, Result, Return


def forbidden(message: str = "You do not have permission to perform this action") -> Result:
    return Return.err(Error("FORBIDDEN", message))


async def authorize(
    uow: UnitOfWork,
    actor_id: UUID,
    action: Action,
    target_owner_id: Optional[UUID] = None,
    target_role: Optional[UserRole] = None,
) -> Result[User]:
    """Load the active actor and check `action` against the Authorization Gate."""
    actor = await uow.users.get_by_id(actor_id)
    if actor is None or not actor.is_active:
        return forbidden()

    if not can_perform(
        actor.role,
        action,
        target_owner_id=target_owner_id,
        actor_id=actor.id,
        target_role=target_role,
    ):
        return forbidden()

    return Return.ok(actor)
