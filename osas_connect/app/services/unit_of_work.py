from abc import ABC, abstractmethod

from osas_connect.app.repositories.application_repository import IApplicationRepository
from osas_connect.app.repositories.audit_event_repository import IAuditEventRepository
from osas_connect.app.repositories.invitation_repository import IInvitationRepository
from osas_connect.app.repositories.profile_repository import (
    IStaffProfileRepository,
    IStudentProfileRepository,
)
from osas_connect.app.repositories.scholarship_repository import IScholarshipRepository
from osas_connect.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    student_profiles: IStudentProfileRepository
    staff_profiles: IStaffProfileRepository
    scholarships: IScholarshipRepository
    applications: IApplicationRepository
    invitations: IInvitationRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
