from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.app.repositories.application_repository import (
    DuplicateOpenApplication,
    IApplicationRepository,
)
from osas_connect.domain.application_status import OPEN_STATUSES
from osas_connect.domain.entities import ApplicationStatus, ScholarshipApplication

_CENTS = Decimal("0.01")


class ApplicationRepository(IApplicationRepository):
    """Scholarship application repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, application_id: UUID) -> Optional[ScholarshipApplication]:
        """Get application by ID, always reflecting the stored row"""
        stmt = (
            select(ScholarshipApplication)
            .where(ScholarshipApplication.id == application_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_open_by_student_and_scholarship(
        self, student_id: UUID, scholarship_id: UUID
    ) -> Optional[ScholarshipApplication]:
        stmt = select(ScholarshipApplication).where(
            ScholarshipApplication.student_id == student_id,
            ScholarshipApplication.scholarship_id == scholarship_id,
            ScholarshipApplication.status.in_(list(OPEN_STATUSES)),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, application: ScholarshipApplication) -> ScholarshipApplication:
        self.session.add(application)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateOpenApplication(str(exc.orig)) from exc
        await self.session.refresh(application)
        return application

    async def compare_and_set(
        self,
        application_id: UUID,
        expected_status: ApplicationStatus,
        **values: Any,
    ) -> Optional[ScholarshipApplication]:
        stmt = (
            update(ScholarshipApplication)
            .where(
                ScholarshipApplication.id == application_id,
                ScholarshipApplication.status == expected_status,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(application_id)

    async def list(
        self,
        status: Optional[ApplicationStatus] = None,
        student_id: Optional[UUID] = None,
        scholarship_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ScholarshipApplication]:
        stmt = select(ScholarshipApplication)
        if status is not None:
            stmt = stmt.where(ScholarshipApplication.status == status)
        if student_id is not None:
            stmt = stmt.where(ScholarshipApplication.student_id == student_id)
        if scholarship_id is not None:
            stmt = stmt.where(ScholarshipApplication.scholarship_id == scholarship_id)

        stmt = stmt.order_by(ScholarshipApplication.applied_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_status(self) -> Dict[ApplicationStatus, int]:
        stmt = select(
            ScholarshipApplication.status, func.count(ScholarshipApplication.id)
        ).group_by(ScholarshipApplication.status)
        result = await self.session.exec(stmt)
        return {ApplicationStatus(status): count for status, count in result.all()}

    async def sum_amount_received(self) -> Decimal:
        stmt = select(func.sum(ScholarshipApplication.amount_received)).where(
            ScholarshipApplication.status == ApplicationStatus.approved
        )
        result = await self.session.exec(stmt)
        total = result.one()
        if total is None:
            return Decimal("0.00")
        return Decimal(str(total)).quantize(_CENTS)
