from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.constants import UNASSIGNED_DRIVER_LABEL
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AdminUser, AppState, Driver, NewAdmin, NewDriver, NewStudent, Student
from .repository import FleetRepository


@dataclass(frozen=True)
class StudentRow:
    """One line of the admin student roster."""

    student_id: str
    student_name: str
    class_grade: str
    driver_name: str
    status: str


@dataclass(frozen=True)
class DriverRow:
    driver_id: str
    driver_name: str
    van_number_plate: str
    route_name: str
    student_count: int


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Only administrators can manage the fleet")


class FleetService:
    """Use case: manage admins, drivers and students (admin dashboard).

    Uniqueness and reference checks are handed to the repository as guards,
    so they see the same document the mutation writes.
    """

    def __init__(self, fleet: FleetRepository):
        self._fleet = fleet

    async def provision_admin(self, *, current_role: Role, admin: NewAdmin) -> AdminUser:
        _require_admin(current_role)

        def username_free(state: AppState) -> None:
            if any(a.username == admin.username for a in state.admins):
                raise ValidationError("Username already exists")

        return await self._fleet.add_admin(admin, guard=username_free)

    @staticmethod
    def _driver_login_free(driver: NewDriver, *, ignore_id: Optional[str] = None):
        # Name + plate is the driver's login, so the pair must stay unambiguous.
        def check(state: AppState) -> None:
            for existing in state.drivers:
                if existing.id == ignore_id:
                    continue
                if (
                    existing.driver_name.lower() == driver.driver_name.lower()
                    and existing.van_number_plate == driver.van_number_plate
                ):
                    raise ValidationError("A driver with this name and van plate already exists")

        return check

    @staticmethod
    def _driver_exists(driver_id: Optional[str]):
        def check(state: AppState) -> None:
            if driver_id and not any(d.id == driver_id for d in state.drivers):
                raise ValidationError("Driver does not exist")

        return check

    async def register_driver(self, *, current_role: Role, driver: NewDriver) -> Driver:
        _require_admin(current_role)
        return await self._fleet.add_driver(driver, guard=self._driver_login_free(driver))

    async def edit_driver(self, *, current_role: Role, driver_id: str, driver: NewDriver) -> Driver:
        _require_admin(current_role)
        updated = await self._fleet.update_driver(
            driver_id, driver, guard=self._driver_login_free(driver, ignore_id=driver_id)
        )
        if not updated:
            raise ValidationError("Driver does not exist")
        return updated

    async def remove_driver(self, *, current_role: Role, driver_id: str) -> None:
        _require_admin(current_role)
        if not await self._fleet.delete_driver(driver_id):
            raise ValidationError("Driver does not exist")

    async def enroll_student(self, *, current_role: Role, student: NewStudent) -> Student:
        _require_admin(current_role)
        return await self._fleet.add_student(student, guard=self._driver_exists(student.driver_id))

    async def edit_student(self, *, current_role: Role, student_id: str, student: NewStudent) -> Student:
        _require_admin(current_role)
        updated = await self._fleet.update_student(
            student_id, student, guard=self._driver_exists(student.driver_id)
        )
        if not updated:
            raise ValidationError("Student does not exist")
        return updated

    async def remove_student(self, *, current_role: Role, student_id: str) -> None:
        _require_admin(current_role)
        if not await self._fleet.delete_student(student_id):
            raise ValidationError("Student does not exist")

    async def list_driver_rows(self) -> Sequence[DriverRow]:
        state = await self._fleet.load()
        out: List[DriverRow] = []
        for d in state.drivers:
            out.append(
                DriverRow(
                    driver_id=d.id,
                    driver_name=d.driver_name,
                    van_number_plate=d.van_number_plate,
                    route_name=d.route_name,
                    student_count=sum(1 for s in state.students if s.driver_id == d.id),
                )
            )
        return out

    async def list_student_rows(self) -> Sequence[StudentRow]:
        state = await self._fleet.load()
        names = {d.id: d.driver_name for d in state.drivers}
        return [
            StudentRow(
                student_id=s.id,
                student_name=s.student_name,
                class_grade=s.class_grade,
                driver_name=names.get(s.driver_id or "", UNASSIGNED_DRIVER_LABEL),
                status=s.status.value,
            )
            for s in state.students
        ]
