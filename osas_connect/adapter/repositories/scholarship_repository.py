from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.app.repositories.scholarship_repository import IScholarshipRepository
from osas_connect.domain.entities import Scholarship


class ScholarshipRepository(IScholarshipRepository):
    """Scholarship repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, scholarship_id: UUID) -> Optional[Scholarship]:
        stmt = select(Scholarship).where(Scholarship.id == scholarship_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()
