from decimal import Decimal
from uuid import uuid4

import pytest

from osas_connect.app.use_cases.applications import (
    AdvanceApplicationUseCase,
    ApproveApplicationUseCase,
    RejectApplicationUseCase,
)
from osas_connect.domain.entities import ApplicationStatus, UserRole
from tests.unit.factories import NOW, cas_applies, make_application, make_user, register_users


@pytest.fixture
def staff(mock_uow):
    staff = make_user(UserRole.osas_staff)
    register_users(mock_uow, staff)
    return staff


def stage(mock_uow, status):
    application = make_application(status)
    mock_uow.applications.get_by_id.return_value = application
    mock_uow.applications.compare_and_set.side_effect = cas_applies(application)
    return application


@pytest.mark.asyncio
async def test_advance_one_step(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.submitted)

    use_case = AdvanceApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW)
    result = await use_case.execute(staff.id, application.id, "under_verification")

    assert result.is_ok()
    assert result.value.status == "under_verification"
    mock_uow.applications.compare_and_set.assert_called_once_with(
        application.id,
        ApplicationStatus.submitted,
        status=ApplicationStatus.under_verification,
    )
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "application_advanced"
    assert audit.event_metadata == {
        "previous_status": "submitted",
        "new_status": "under_verification",
    }
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_reaching_verified_stamps_verified_at(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.under_verification)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW).execute(
        staff.id, application.id, "verified"
    )

    assert result.value.verified_at == NOW.isoformat()


@pytest.mark.asyncio
async def test_advance_straight_to_verified_from_submitted_fails(mock_uow, dispatcher, staff):
    """Scenario: submitted -> verified must pass through under_verification."""
    application = stage(mock_uow, ApplicationStatus.submitted)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "verified"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSITION"
    assert application.status == ApplicationStatus.submitted
    mock_uow.applications.compare_and_set.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_advance_backwards_fails(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.verified)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "submitted"
    )

    assert result.error.code == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_advance_to_approved_requires_amount(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.under_evaluation)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "approved"
    )

    assert result.error.code == "INVALID_AMOUNT"
    mock_uow.applications.compare_and_set.assert_not_called()


@pytest.mark.asyncio
async def test_advance_unknown_status(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.submitted)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "pending_review"
    )

    assert result.error.code == "INVALID_STATUS"


@pytest.mark.asyncio
async def test_advance_missing_application(mock_uow, dispatcher, staff):
    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, uuid4(), "under_verification"
    )

    assert result.error.code == "APPLICATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_student_cannot_advance_even_own_application(mock_uow, dispatcher):
    student = make_user(UserRole.student)
    register_users(mock_uow, student)
    application = stage(mock_uow, ApplicationStatus.submitted)
    application.student_id = student.id

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        student.id, application.id, "under_verification"
    )

    assert result.error.code == "FORBIDDEN"
    mock_uow.applications.compare_and_set.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_reports_invalid_transition(mock_uow, dispatcher, staff):
    application = make_application(ApplicationStatus.under_evaluation)
    mock_uow.applications.get_by_id.return_value = application
    mock_uow.applications.compare_and_set.side_effect = None
    mock_uow.applications.compare_and_set.return_value = None

    result = await RejectApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, "late")

    assert result.error.code == "INVALID_TRANSITION"
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_approve_then_reject_fails(mock_uow, dispatcher, staff):
    """Scenario: approve(5000) from under_evaluation, then reject fails."""
    application = stage(mock_uow, ApplicationStatus.under_evaluation)

    approved = await ApproveApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW).execute(
        staff.id, application.id, 5000
    )

    assert approved.is_ok()
    assert approved.value.status == "approved"
    assert approved.value.approved_at == NOW.isoformat()
    assert approved.value.rejected_at is None
    assert Decimal(approved.value.amount_received) == Decimal("5000")

    rejected = await RejectApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, "x")

    assert rejected.error.code == "INVALID_TRANSITION"
    assert application.status == ApplicationStatus.approved
    assert application.rejected_at is None


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -100, "abc", "NaN", "Infinity", None])
async def test_approve_rejects_invalid_amount(mock_uow, dispatcher, staff, amount):
    application = stage(mock_uow, ApplicationStatus.under_evaluation)

    result = await ApproveApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, amount)

    assert result.error.code == "INVALID_AMOUNT"
    assert application.status == ApplicationStatus.under_evaluation
    assert application.amount_received is None


@pytest.mark.asyncio
async def test_approve_only_from_under_evaluation(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.verified)

    result = await ApproveApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, "1000")

    assert result.error.code == "INVALID_TRANSITION"
    assert application.amount_received is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status",
    [
        ApplicationStatus.submitted,
        ApplicationStatus.under_verification,
        ApplicationStatus.verified,
        ApplicationStatus.under_evaluation,
    ],
)
async def test_reject_from_any_open_status(mock_uow, dispatcher, staff, status):
    application = stage(mock_uow, status)

    result = await RejectApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW).execute(
        staff.id, application.id, "Incomplete requirements"
    )

    assert result.is_ok()
    assert result.value.status == "rejected"
    assert result.value.rejected_at == NOW.isoformat()
    assert result.value.rejection_reason == "Incomplete requirements"
    assert result.value.approved_at is None
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "application_rejected"
    assert audit.event_metadata["reason"] == "Incomplete requirements"
    assert audit.event_metadata["previous_status"] == status.value


@pytest.mark.asyncio
async def test_rejecting_through_advance(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.under_verification)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, "rejected")

    assert result.value.status == "rejected"
    assert result.value.rejected_at is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["0.001", "0.004", "1000.005", "12345678901", "1e10"])
async def test_approve_rejects_amounts_that_cannot_be_stored_exactly(
    mock_uow, dispatcher, staff, amount
):
    application = stage(mock_uow, ApplicationStatus.under_evaluation)

    result = await ApproveApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, amount
    )

    assert result.error.code == "INVALID_AMOUNT"
    mock_uow.applications.compare_and_set.assert_not_called()
    assert application.status == ApplicationStatus.under_evaluation
    assert application.amount_received is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "amount,stored",
    [("1500.5", "1500.50"), ("1e3", "1000.00"), (" 0.01 ", "0.01"), ("9999999999.99", "9999999999.99")],
)
async def test_approve_stores_amount_in_cents(mock_uow, dispatcher, staff, amount, stored):
    application = stage(mock_uow, ApplicationStatus.under_evaluation)

    result = await ApproveApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, amount
    )

    assert result.is_ok()
    assert result.value.amount_received == stored
    assert application.amount_received == Decimal(stored)


def student_of(mock_uow, staff, application):
    student = make_user(UserRole.student, id=application.student_id, email="juan@student.edu")
    register_users(mock_uow, staff, student)
    return student


@pytest.mark.asyncio
async def test_advance_with_notes_keeps_them_on_the_application(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.under_verification)
    student_of(mock_uow, staff, application)

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW).execute(
        staff.id, application.id, "verified", notes="Grades confirmed with registrar"
    )

    assert result.value.reviewer_notes == "Grades confirmed with registrar"
    mock_uow.applications.compare_and_set.assert_called_once_with(
        application.id,
        ApplicationStatus.under_verification,
        status=ApplicationStatus.verified,
        verified_at=NOW,
        reviewer_notes="Grades confirmed with registrar",
    )
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.event_metadata["notes"] == "Grades confirmed with registrar"
    payload = dispatcher.send_status_changed.call_args[0][1]
    assert payload.notes == "Grades confirmed with registrar"


@pytest.mark.asyncio
async def test_each_transition_emails_the_student(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.under_evaluation)
    student = student_of(mock_uow, staff, application)

    result = await ApproveApplicationUseCase(mock_uow, dispatcher, now=lambda: NOW).execute(
        staff.id, application.id, "5000"
    )

    assert result.is_ok()
    dispatcher.send_status_changed.assert_awaited_once()
    recipient, payload = dispatcher.send_status_changed.call_args[0]
    assert recipient == "juan@student.edu" == student.email
    assert payload.application_id == str(application.id)
    assert payload.previous_status == "under_evaluation"
    assert payload.new_status == "approved"
    assert payload.changed_at == NOW.isoformat()


@pytest.mark.asyncio
async def test_rejection_email_carries_the_reason(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.verified)
    student_of(mock_uow, staff, application)

    await RejectApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "Missing grade report"
    )

    payload = dispatcher.send_status_changed.call_args[0][1]
    assert payload.new_status == "rejected"
    assert payload.notes == "Missing grade report"


@pytest.mark.asyncio
async def test_failed_status_email_does_not_undo_transition(mock_uow, dispatcher, staff, caplog):
    application = stage(mock_uow, ApplicationStatus.submitted)
    student_of(mock_uow, staff, application)
    dispatcher.send_status_changed.side_effect = ConnectionError("smtp down")

    result = await AdvanceApplicationUseCase(mock_uow, dispatcher).execute(
        staff.id, application.id, "under_verification"
    )

    assert result.is_ok()
    assert application.status == ApplicationStatus.under_verification
    mock_uow.commit.assert_called_once()
    mock_uow.rollback.assert_not_called()
    assert "Failed to dispatch status email" in caplog.text


@pytest.mark.asyncio
async def test_failed_transition_sends_no_email(mock_uow, dispatcher, staff):
    application = stage(mock_uow, ApplicationStatus.approved)
    student_of(mock_uow, staff, application)

    result = await RejectApplicationUseCase(mock_uow, dispatcher).execute(staff.id, application.id, "x")

    assert result.error.code == "INVALID_TRANSITION"
    dispatcher.send_status_changed.assert_not_called()
