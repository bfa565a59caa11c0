from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.adapter.repositories.application_repository import ApplicationRepository
from osas_connect.adapter.repositories.audit_event_repository import AuditEventRepository
from osas_connect.adapter.repositories.invitation_repository import InvitationRepository
from osas_connect.adapter.repositories.profile_repository import (
    StaffProfileRepository,
    StudentProfileRepository,
)
from osas_connect.adapter.repositories.scholarship_repository import ScholarshipRepository
from osas_connect.adapter.repositories.user_repository import UserRepository
from osas_connect.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        self.student_profiles = StudentProfileRepository(self.session)
        self.staff_profiles = StaffProfileRepository(self.session)
        self.scholarships = ScholarshipRepository(self.session)
        self.applications = ApplicationRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
