from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from osas_connect.domain.entities import ApplicationStatus, ScholarshipApplication


class DuplicateOpenApplication(Exception):
    """Raised by create() when the student already has an open application"""


class IApplicationRepository(ABC):
    """Scholarship application repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[ScholarshipApplication]:
        """Get application by ID"""
        pass

    @abstractmethod
    async def get_open_by_student_and_scholarship(
        self, student_id: UUID, scholarship_id: UUID
    ) -> Optional[ScholarshipApplication]:
        """Get the non-terminal application of a student for a scholarship"""
        pass

    @abstractmethod
    async def create(self, application: ScholarshipApplication) -> ScholarshipApplication:
        """
        Create a new application.

        Raises:
            DuplicateOpenApplication: storage already holds an open application
                for the same student and scholarship
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self,
        application_id: UUID,
        expected_status: ApplicationStatus,
        **values: Any,
    ) -> Optional[ScholarshipApplication]:
        """
        Atomically apply `values` if the stored status still equals `expected_status`.

        Returns:
            The refreshed application, or None if the precondition failed
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[ApplicationStatus] = None,
        student_id: Optional[UUID] = None,
        scholarship_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ScholarshipApplication]:
        """List applications, most recently applied first"""
        pass

    @abstractmethod
    async def count_by_status(self) -> Dict[ApplicationStatus, int]:
        """Number of applications per status (statuses without rows are omitted)"""
        pass

    @abstractmethod
    async def sum_amount_received(self) -> Decimal:
        """Total amount_received over approved applications"""
        pass
