from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from osas_connect.domain.entities import Scholarship


class IScholarshipRepository(ABC):
    """Scholarship repository interface - read only for the workflows"""

    @abstractmethod
    async def get_by_id(self, scholarship_id: UUID) -> Optional[Scholarship]:
        pass
