from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import AdminUser, AppState, Driver, NewAdmin, NewDriver, NewStudent, Student

# Guards run inside the serialized mutation and raise to abort it.
StateGuard = Callable[[AppState], None]
StudentGuard = Callable[[Student], None]


class FleetRepository(Protocol):
    """Repository interface for the fleet document.

    Note (DIP): services depend on this interface, not on a concrete storage backend.
    """

    async def load(self) -> AppState:
        raise NotImplementedError

    async def save(self, state: AppState) -> None:
        raise NotImplementedError

    async def add_admin(self, admin: NewAdmin, *, guard: Optional[StateGuard] = None) -> AdminUser:
        raise NotImplementedError

    async def add_driver(self, driver: NewDriver, *, guard: Optional[StateGuard] = None) -> Driver:
        raise NotImplementedError

    async def add_student(self, student: NewStudent, *, guard: Optional[StateGuard] = None) -> Student:
        raise NotImplementedError

    async def find_admin_by_id(self, admin_id: str) -> Optional[AdminUser]:
        raise NotImplementedError

    async def find_driver_by_id(self, driver_id: str) -> Optional[Driver]:
        raise NotImplementedError

    async def find_student_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    async def find_students_by_driver(self, driver_id: str) -> Sequence[Student]:
        raise NotImplementedError

    async def list_admins(self) -> Sequence[AdminUser]:
        raise NotImplementedError

    async def list_drivers(self) -> Sequence[Driver]:
        raise NotImplementedError

    async def list_students(self) -> Sequence[Student]:
        raise NotImplementedError

    async def update_admin(self, admin_id: str, admin: NewAdmin) -> Optional[AdminUser]:
        raise NotImplementedError

    async def update_driver(
        self, driver_id: str, driver: NewDriver, *, guard: Optional[StateGuard] = None
    ) -> Optional[Driver]:
        raise NotImplementedError

    async def update_student(
        self, student_id: str, student: NewStudent, *, guard: Optional[StateGuard] = None
    ) -> Optional[Student]:
        raise NotImplementedError

    async def update_student_status(
        self, student_id: str, new_status: StudentStatus, *, guard: Optional[StudentGuard] = None
    ) -> Optional[Student]:
        """Validates the guard and the lifecycle transition before persisting."""

        raise NotImplementedError

    async def delete_admin(self, admin_id: str) -> bool:
        raise NotImplementedError

    async def delete_driver(self, driver_id: str) -> bool:
        raise NotImplementedError

    async def delete_student(self, student_id: str) -> bool:
        raise NotImplementedError

    async def reset_trip_statuses(self, driver_id: Optional[str] = None) -> int:
        raise NotImplementedError
