from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from tests.unit.factories import NOW


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.list_active_emails = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.student_profiles = MagicMock()
    uow.student_profiles.get_by_user_id = AsyncMock(return_value=None)

    uow.staff_profiles = MagicMock()
    uow.staff_profiles.get_by_staff_id = AsyncMock(return_value=None)
    uow.staff_profiles.create = AsyncMock(side_effect=lambda profile: profile)

    uow.scholarships = MagicMock()
    uow.scholarships.get_by_id = AsyncMock(return_value=None)

    uow.applications = MagicMock()
    uow.applications.get_by_id = AsyncMock(return_value=None)
    uow.applications.get_open_by_student_and_scholarship = AsyncMock(return_value=None)
    uow.applications.create = AsyncMock(side_effect=lambda application: application)
    uow.applications.compare_and_set = AsyncMock(return_value=None)
    uow.applications.list = AsyncMock(return_value=[])
    uow.applications.count_by_status = AsyncMock(return_value={})
    uow.applications.sum_amount_received = AsyncMock(return_value=Decimal("0.00"))

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_by_token_hash = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.compare_and_set = AsyncMock(return_value=None)
    uow.invitations.list = AsyncMock(return_value=[])
    uow.invitations.count_pending = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    uow.audit_events.get_paginated = AsyncMock(return_value=([], None))

    return uow


@pytest.fixture
def dispatcher():
    dispatcher = MagicMock(spec=NotificationDispatcher)
    dispatcher.send_invitation = AsyncMock()
    dispatcher.send_status_changed = AsyncMock()
    return dispatcher
