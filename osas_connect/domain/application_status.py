"""
Scholarship application status chain.

    submitted -> under_verification -> verified -> under_evaluation -> approved

Rejection is reachable from every non-terminal status. Approved and rejected
are terminal. Any other move, including skipping a step or moving backwards,
is illegal.
"""

from typing import FrozenSet, Optional

from .entities.enums import ApplicationStatus

REVIEW_CHAIN = (
    ApplicationStatus.submitted,
    ApplicationStatus.under_verification,
    ApplicationStatus.verified,
    ApplicationStatus.under_evaluation,
    ApplicationStatus.approved,
)

TERMINAL_STATUSES: FrozenSet[ApplicationStatus] = frozenset(
    {ApplicationStatus.approved, ApplicationStatus.rejected}
)

OPEN_STATUSES: FrozenSet[ApplicationStatus] = frozenset(
    status for status in ApplicationStatus if status not in TERMINAL_STATUSES
)


def is_terminal(status: ApplicationStatus) -> bool:
    return status in TERMINAL_STATUSES


def successor(status: ApplicationStatus) -> Optional[ApplicationStatus]:
    """The single forward step from `status`, or None when terminal."""
    if is_terminal(status):
        return None
    return REVIEW_CHAIN[REVIEW_CHAIN.index(status) + 1]


def legal_targets(status: ApplicationStatus) -> FrozenSet[ApplicationStatus]:
    if is_terminal(status):
        return frozenset()
    return frozenset({successor(status), ApplicationStatus.rejected})


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in legal_targets(current)


def rank(status: ApplicationStatus) -> int:
    """Position in the chain; both terminal statuses share the last rank."""
    if status == ApplicationStatus.rejected:
        return len(REVIEW_CHAIN) - 1
    return REVIEW_CHAIN.index(status)
