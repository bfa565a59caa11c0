from datetime import timedelta
from uuid import uuid4

import pytest

from osas_connect.app.services.invitation_tokens import hash_token
from osas_connect.app.use_cases.invitations import (
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
)
from osas_connect.domain.entities import InvitationStatus, UserRole
from tests.unit.factories import NOW, make_invitation, make_user, register_users

BASE_URL = "https://osas.example.edu"


def stage(mock_uow, **overrides):
    invitation = make_invitation(**overrides)
    mock_uow.invitations.get_by_id.return_value = invitation

    def cas(invitation_id, expected_status, expected_token_hash=None, **values):
        if invitation.status != expected_status:
            return None
        if expected_token_hash is not None and invitation.token_hash != expected_token_hash:
            return None
        for key, value in values.items():
            setattr(invitation, key, value)
        return invitation

    mock_uow.invitations.compare_and_set.side_effect = cas
    return invitation


def resend_use_case(mock_uow, dispatcher):
    return ResendInvitationUseCase(mock_uow, dispatcher, BASE_URL, now=lambda: NOW)


@pytest.fixture
def admin(mock_uow):
    admin = make_user(UserRole.admin)
    register_users(mock_uow, admin)
    return admin


@pytest.mark.asyncio
async def test_resend_rotates_token_and_extends_expiry(mock_uow, dispatcher, admin):
    invitation = stage(mock_uow, inviter_id=admin.id)
    old_hash = invitation.token_hash
    created_at = invitation.created_at

    result = await resend_use_case(mock_uow, dispatcher).execute(admin.id, invitation.id)

    assert result.is_ok()
    assert result.value.status == "resent"
    assert result.value.expires_at == (NOW + timedelta(days=7)).isoformat()
    assert invitation.token_hash != old_hash
    assert invitation.expires_at == NOW + timedelta(days=7)
    assert invitation.created_at == created_at
    assert invitation.status == InvitationStatus.pending

    recipient, payload = dispatcher.send_invitation.call_args[0]
    assert recipient == invitation.email
    new_token = payload.accept_url.split("token=", 1)[1]
    assert hash_token(new_token) == invitation.token_hash

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "invitation_resent"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_resend_of_stale_pending_invitation_is_allowed(mock_uow, dispatcher, admin):
    invitation = stage(mock_uow, expires_at=NOW - timedelta(days=1))

    result = await resend_use_case(mock_uow, dispatcher).execute(admin.id, invitation.id)

    assert result.is_ok()
    assert invitation.expires_at > NOW


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status", [InvitationStatus.accepted, InvitationStatus.revoked, InvitationStatus.expired]
)
async def test_resend_requires_pending(mock_uow, dispatcher, admin, status):
    invitation = stage(mock_uow, status=status)

    result = await resend_use_case(mock_uow, dispatcher).execute(admin.id, invitation.id)

    assert result.error.code == "ALREADY_CONSUMED"
    dispatcher.send_invitation.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_resend_loses_token_race(mock_uow, dispatcher, admin):
    invitation = stage(mock_uow)
    mock_uow.invitations.compare_and_set.side_effect = None
    mock_uow.invitations.compare_and_set.return_value = None

    result = await resend_use_case(mock_uow, dispatcher).execute(admin.id, invitation.id)

    assert result.error.code == "ALREADY_CONSUMED"
    dispatcher.send_invitation.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_resend_missing_invitation(mock_uow, dispatcher, admin):
    result = await resend_use_case(mock_uow, dispatcher).execute(admin.id, uuid4())

    assert result.error.code == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_staff_may_resend_invitations_sent_by_others(mock_uow, dispatcher):
    staff = make_user(UserRole.osas_staff)
    register_users(mock_uow, staff)
    invitation = stage(mock_uow, inviter_id=uuid4())

    result = await resend_use_case(mock_uow, dispatcher).execute(staff.id, invitation.id)

    assert result.is_ok()
    # Unknown inviter falls back to the acting user's name
    payload = dispatcher.send_invitation.call_args[0][1]
    assert payload.inviter_name == staff.full_name


@pytest.mark.asyncio
async def test_staff_cannot_resend_or_revoke_admin_invitations(mock_uow, dispatcher):
    staff = make_user(UserRole.osas_staff)
    register_users(mock_uow, staff)
    invitation = stage(mock_uow, role=UserRole.admin)

    resend = await resend_use_case(mock_uow, dispatcher).execute(staff.id, invitation.id)
    revoke = await RevokeInvitationUseCase(mock_uow).execute(staff.id, invitation.id)

    assert resend.error.code == "FORBIDDEN"
    assert revoke.error.code == "FORBIDDEN"
    assert invitation.status == InvitationStatus.pending


@pytest.mark.asyncio
async def test_revoke_pending(mock_uow, admin):
    invitation = stage(mock_uow)

    result = await RevokeInvitationUseCase(mock_uow).execute(admin.id, invitation.id)

    assert result.value.status == "revoked"
    assert invitation.status == InvitationStatus.revoked
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "invitation_revoked"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_is_idempotent(mock_uow, admin):
    invitation = stage(mock_uow, status=InvitationStatus.revoked)

    result = await RevokeInvitationUseCase(mock_uow).execute(admin.id, invitation.id)

    assert result.is_ok()
    assert result.value.status == "revoked"
    mock_uow.invitations.compare_and_set.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [InvitationStatus.accepted, InvitationStatus.expired])
async def test_revoke_consumed_invitation(mock_uow, admin, status):
    invitation = stage(mock_uow, status=status)

    result = await RevokeInvitationUseCase(mock_uow).execute(admin.id, invitation.id)

    assert result.error.code == "ALREADY_CONSUMED"
    assert invitation.status == status


@pytest.mark.asyncio
async def test_revoke_racing_with_accept(mock_uow, admin):
    pending = make_invitation()
    accepted = make_invitation(id=pending.id, status=InvitationStatus.accepted)
    mock_uow.invitations.get_by_id.side_effect = [pending, accepted]
    mock_uow.invitations.compare_and_set.return_value = None

    result = await RevokeInvitationUseCase(mock_uow).execute(admin.id, pending.id)

    assert result.error.code == "ALREADY_CONSUMED"


@pytest.mark.asyncio
async def test_revoke_racing_with_revoke(mock_uow, admin):
    pending = make_invitation()
    revoked = make_invitation(id=pending.id, status=InvitationStatus.revoked)
    mock_uow.invitations.get_by_id.side_effect = [pending, revoked]
    mock_uow.invitations.compare_and_set.return_value = None

    result = await RevokeInvitationUseCase(mock_uow).execute(admin.id, pending.id)

    assert result.value.status == "revoked"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_student_cannot_revoke(mock_uow):
    student = make_user(UserRole.student)
    register_users(mock_uow, student)

    result = await RevokeInvitationUseCase(mock_uow).execute(student.id, uuid4())

    assert result.error.code == "FORBIDDEN"
