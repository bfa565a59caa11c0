"""
Approve Application Use Case

Final approval of an application under evaluation, recording the amount awarded.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from osas_connect.app.use_cases.common import authorize
from osas_connect.domain.authorization import Action
from osas_connect.domain.entities import ApplicationStatus
from osas_connect.libs.result import Error, Result, Return

from .dtos import ApplicationResponse
from .transition import ApplicationTransitionUseCase

CENT = Decimal("0.01")
# amount_received is NUMERIC(12, 2): at most 10 digits before the point
MAX_AMOUNT = Decimal("9999999999.99")


def parse_amount(raw) -> Optional[Decimal]:
    """The amount as a 2-place Decimal, or None if it cannot be stored exactly"""
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
        return None
    if amount != amount.quantize(CENT):
        return None
    return amount.quantize(CENT)


class ApproveApplicationUseCase(ApplicationTransitionUseCase):
    """
    Use case for approving an application.

    Business Rules:
    - Only OSAS staff and admins may approve
    - Only reachable from under_evaluation
    - Amount must be positive, in whole cents, and fit the stored column;
      anything that would be rounded on save is rejected with INVALID_AMOUNT
    - Status, approved_at and amount_received are written in one atomic update
    """

    async def execute(
        self, actor_id: UUID, application_id: UUID, amount
    ) -> Result[ApplicationResponse]:
        async with self.uow:
            auth = await authorize(self.uow, actor_id, Action.approve_application)
            if auth.is_err():
                return auth
            actor = auth.value

            parsed = parse_amount(amount)
            if parsed is None:
                return Return.err(
                    Error(
                        "INVALID_AMOUNT",
                        "Amount must be greater than zero with at most 2 decimal places",
                        reason=f"Got {amount!r}",
                    )
                )

            loaded = await self._load(application_id)
            if loaded.is_err():
                return loaded

            return await self._apply(
                actor,
                loaded.value,
                ApplicationStatus.approved,
                "application_approved",
                extra_values={"amount_received": parsed},
                audit_metadata={"amount": parsed},
            )
