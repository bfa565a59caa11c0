import pytest

from osas_connect.domain.application_status import (
    REVIEW_CHAIN,
    can_transition,
    is_terminal,
    legal_targets,
    rank,
    successor,
)
from osas_connect.domain.entities import ApplicationStatus as S


@pytest.mark.parametrize(
    "current,target",
    [
        (S.submitted, S.under_verification),
        (S.under_verification, S.verified),
        (S.verified, S.under_evaluation),
        (S.under_evaluation, S.approved),
    ],
)
def test_each_step_of_the_chain_is_legal(current, target):
    assert can_transition(current, target)
    assert successor(current) == target


@pytest.mark.parametrize(
    "current", [S.submitted, S.under_verification, S.verified, S.under_evaluation]
)
def test_rejection_is_reachable_from_every_open_status(current):
    assert can_transition(current, S.rejected)


def test_skipping_a_step_is_illegal():
    assert not can_transition(S.submitted, S.verified)
    assert not can_transition(S.submitted, S.approved)
    assert not can_transition(S.under_verification, S.under_evaluation)


def test_approval_only_from_under_evaluation():
    allowed = [status for status in S if can_transition(status, S.approved)]
    assert allowed == [S.under_evaluation]


def test_backward_moves_are_illegal():
    for index, status in enumerate(REVIEW_CHAIN):
        for earlier in REVIEW_CHAIN[:index + 1]:
            assert not can_transition(status, earlier)


@pytest.mark.parametrize("terminal", [S.approved, S.rejected])
def test_terminal_statuses_have_no_exit(terminal):
    assert is_terminal(terminal)
    assert successor(terminal) is None
    assert legal_targets(terminal) == frozenset()
    assert not any(can_transition(terminal, target) for target in S)


def test_every_legal_move_increases_rank():
    for current in S:
        for target in legal_targets(current):
            assert rank(target) > rank(current)


def test_rejected_shares_the_final_rank_with_approved():
    assert rank(S.rejected) == rank(S.approved) == len(REVIEW_CHAIN) - 1
