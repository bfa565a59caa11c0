from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.app.repositories.profile_repository import (
    IStaffProfileRepository,
    IStudentProfileRepository,
)
from osas_connect.domain.entities import OsasStaffProfile, StudentProfile


class StudentProfileRepository(IStudentProfileRepository):
    """Student profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[StudentProfile]:
        stmt = select(StudentProfile).where(StudentProfile.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()


class StaffProfileRepository(IStaffProfileRepository):
    """OSAS staff profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_staff_id(self, staff_id: str) -> Optional[OsasStaffProfile]:
        stmt = select(OsasStaffProfile).where(OsasStaffProfile.staff_id == staff_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, profile: OsasStaffProfile) -> OsasStaffProfile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile
