from decimal import Decimal
from typing import List, Tuple
from urllib.parse import parse_qs, urlparse

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from osas_connect.api.utils.jwt import generate_jwt
from osas_connect.app.services.notification_dispatcher import (
    ApplicationStatusNotification,
    InvitationNotification,
    NotificationDispatcher,
)
from osas_connect.app.services.passwords import hash_password
from osas_connect.depends import get_notification_dispatcher, get_unit_of_work
from osas_connect.domain.entities import (
    Scholarship,
    StudentProfile,
    User,
    UserRole,
)


class RecordingDispatcher(NotificationDispatcher):
    """Keeps every message instead of sending it"""

    def __init__(self):
        self.sent: List[Tuple[str, InvitationNotification]] = []
        self.status_changes: List[Tuple[str, ApplicationStatusNotification]] = []

    async def send_invitation(self, recipient: str, payload: InvitationNotification) -> None:
        self.sent.append((recipient, payload))

    async def send_status_changed(
        self, recipient: str, payload: ApplicationStatusNotification
    ) -> None:
        self.status_changes.append((recipient, payload))

    def last_token(self) -> str:
        _, payload = self.sent[-1]
        return parse_qs(urlparse(payload.accept_url).query)["token"][0]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def client(db_session, dispatcher):
    from httpx import ASGITransport
    from osas_connect.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url=f"http://test{ApplicationConfig.API_PREFIX}"
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def seed(db_session):
    """
    One admin, one OSAS staff member, two students and a scholarship.

    Returns plain ids and bearer headers so tests never touch ORM state
    that a later request may have expired.
    """
    password_hash = hash_password("Passw0rd!")
    admin = User(
        email="admin@osas.edu",
        role=UserRole.admin,
        first_name="Elena",
        last_name="Cruz",
        password_hash=password_hash,
    )
    staff = User(
        email="staff@osas.edu",
        role=UserRole.osas_staff,
        first_name="Paolo",
        last_name="Reyes",
        password_hash=password_hash,
    )
    student = User(
        email="juan@student.edu",
        role=UserRole.student,
        first_name="Juan",
        last_name="Dela Cruz",
        password_hash=password_hash,
    )
    other_student = User(
        email="ana@student.edu",
        role=UserRole.student,
        first_name="Ana",
        last_name="Lopez",
        password_hash=password_hash,
    )
    scholarship = Scholarship(
        name="Academic Excellence", type="academic_full", amount=Decimal("5000")
    )
    db_session.add_all([admin, staff, student, other_student, scholarship])
    await db_session.flush()
    db_session.add(
        StudentProfile(user_id=student.id, student_id="2021-0001", course="BSCS", year_level="3")
    )
    await db_session.commit()

    ids = {
        "admin": admin.id,
        "staff": staff.id,
        "student": student.id,
        "other_student": other_student.id,
        "scholarship": scholarship.id,
    }
    roles = {
        "admin": "admin",
        "staff": "osas_staff",
        "student": "student",
        "other_student": "student",
    }
    headers = {
        name: {"Authorization": f"Bearer {generate_jwt(ids[name], role)}"}
        for name, role in roles.items()
    }
    return {"ids": ids, "headers": headers}
