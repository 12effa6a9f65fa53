"""Pickup-status lifecycle of a student.

WAITING -> ONBOARD -> DROPPED. DROPPED ends the trip cycle; moving a student
back to WAITING is a new-cycle reset, not a transition.
"""

from __future__ import annotations

from typing import FrozenSet, Mapping

from ..core.enums import StudentStatus
from ..core.exceptions import InvalidTransitionError

INITIAL_STATUS = StudentStatus.WAITING

ALLOWED_TRANSITIONS: Mapping[StudentStatus, FrozenSet[StudentStatus]] = {
    StudentStatus.WAITING: frozenset({StudentStatus.ONBOARD}),
    StudentStatus.ONBOARD: frozenset({StudentStatus.DROPPED}),
    StudentStatus.DROPPED: frozenset(),
}


def can_transition(current: StudentStatus, requested: StudentStatus) -> bool:
    return StudentStatus(requested) in ALLOWED_TRANSITIONS[StudentStatus(current)]


def validate_transition(current: StudentStatus, requested: StudentStatus) -> StudentStatus:
    try:
        allowed = can_transition(current, requested)
    except ValueError:
        allowed = False
    if not allowed:
        raise InvalidTransitionError(current, requested)
    return StudentStatus(requested)


def is_terminal(status: StudentStatus) -> bool:
    return not ALLOWED_TRANSITIONS[StudentStatus(status)]
