from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from osas_connect.domain.entities import OsasStaffProfile, StudentProfile


class IStudentProfileRepository(ABC):
    """Student profile repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[StudentProfile]:
        pass


class IStaffProfileRepository(ABC):
    """OSAS staff profile repository interface - application layer"""

    @abstractmethod
    async def get_by_staff_id(self, staff_id: str) -> Optional[OsasStaffProfile]:
        pass

    @abstractmethod
    async def create(self, profile: OsasStaffProfile) -> OsasStaffProfile:
        pass
