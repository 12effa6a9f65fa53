from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..auth.model import Principal
from ..core.constants import ROUTE_COMPLETE_LABEL
from ..core.enums import Role, StudentStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..fleet.model import Student
from ..fleet.repository import FleetRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripProgress:
    onboard_count: int
    total: int
    fraction: float
    next_stop: str

    @property
    def percent(self) -> float:
        return self.fraction * 100


def onboard_count(students: Sequence[Student]) -> int:
    return sum(1 for s in students if s.status == StudentStatus.ONBOARD)


def progress_fraction(students: Sequence[Student]) -> float:
    """Share of the roster currently onboard; an empty roster is 0.0."""

    if not students:
        return 0.0
    return onboard_count(students) / len(students)


def next_stop(students: Sequence[Student]) -> str:
    waiting = next((s for s in students if s.status == StudentStatus.WAITING), None)
    return waiting.home_location if waiting else ROUTE_COMPLETE_LABEL


class AttendanceService:
    """Use case: driver marks pickups and drop-offs on their roster."""

    def __init__(self, fleet: FleetRepository):
        self._fleet = fleet

    @staticmethod
    def _roster_guard(principal: Principal):
        if principal.role not in {Role.DRIVER, Role.ADMIN}:
            raise AuthorizationError("Only drivers can update pickup status")

        def check(student: Student) -> None:
            if principal.role == Role.DRIVER and student.driver_id != principal.id:
                raise AuthorizationError("Student is not on this driver's roster")

        return check

    async def _move(self, principal: Principal, student_id: str, status: StudentStatus) -> Student:
        # The roster check runs inside the repository lock, against the stored assignment.
        updated = await self._fleet.update_student_status(
            student_id, status, guard=self._roster_guard(principal)
        )
        if not updated:
            raise ValidationError("Student does not exist")
        logger.info("%s marked student %s %s", principal.id, student_id, status.value)
        return updated

    async def mark_onboard(self, *, principal: Principal, student_id: str) -> Student:
        return await self._move(principal, student_id, StudentStatus.ONBOARD)

    async def mark_dropped(self, *, principal: Principal, student_id: str) -> Student:
        return await self._move(principal, student_id, StudentStatus.DROPPED)

    async def roster(self, driver_id: str) -> Sequence[Student]:
        return await self._fleet.find_students_by_driver(driver_id)

    async def trip_progress(self, driver_id: str) -> TripProgress:
        students = await self._fleet.find_students_by_driver(driver_id)
        return TripProgress(
            onboard_count=onboard_count(students),
            total=len(students),
            fraction=progress_fraction(students),
            next_stop=next_stop(students),
        )

    async def start_new_trip(self, *, principal: Principal, driver_id: Optional[str] = None) -> int:
        """Put students back to WAITING for a new trip cycle.

        Meant for a scheduling collaborator (e.g. a daily job) running as admin,
        or for a driver restarting their own route.
        """

        if principal.role == Role.DRIVER:
            driver_id = principal.id
        elif principal.role != Role.ADMIN:
            raise AuthorizationError("Only drivers or administrators can start a trip")
        return await self._fleet.reset_trip_statuses(driver_id)
