from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..attendance.lifecycle import INITIAL_STATUS, validate_transition
from ..common.ids import new_id
from ..core.constants import DB_KEY
from ..core.enums import StudentStatus
from ..core.exceptions import PersistenceError
from ..storage.backend import KeyValueStorage
from .codec import decode_state, encode_state
from .model import AdminUser, AppState, Driver, NewAdmin, NewDriver, NewStudent, Student
from .repository import FleetRepository, StateGuard, StudentGuard

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _replace_by_id(items: Tuple[T, ...], item_id: str, make: Callable[[T], T]) -> Tuple[Tuple[T, ...], Optional[T]]:
    updated: List[T] = []
    found: Optional[T] = None
    for item in items:
        if found is None and getattr(item, "id") == item_id:
            found = make(item)
            updated.append(found)
        else:
            updated.append(item)
    return tuple(updated), found


def _without_id(items: Tuple[T, ...], item_id: str) -> Tuple[T, ...]:
    return tuple(i for i in items if getattr(i, "id") != item_id)


class DocumentFleetRepository(FleetRepository):
    """Fleet repository over a single key-value slot.

    Every mutation reads the whole document, changes it and writes the whole
    document back. Mutations run one at a time under a lock, so two
    overlapping add_student calls both end up in the stored document.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DB_KEY,
        id_factory: Callable[[], str] = new_id,
    ):
        self._storage = storage
        self._key = key
        self._new_id = id_factory
        self._lock = asyncio.Lock()

    async def _read_state(self) -> AppState:
        raw = await self._storage.get_item(self._key)
        if raw is None:
            return AppState.empty()
        return decode_state(raw)

    async def load(self) -> AppState:
        try:
            return await self._read_state()
        except PersistenceError as exc:
            logger.error("Error getting data: %s", exc)
            return AppState.empty()

    async def _write(self, state: AppState) -> None:
        try:
            await self._storage.set_item(self._key, encode_state(state))
        except PersistenceError as exc:
            logger.error("Error saving data: %s", exc)
            raise

    async def save(self, state: AppState) -> None:
        async with self._lock:
            await self._write(state)

    async def _mutate(self, change: Callable[[AppState], Tuple[AppState, T]]) -> T:
        # Strict read: a document that cannot be parsed must not be replaced
        # by the empty default plus one record.
        async with self._lock:
            state = await self._read_state()
            new_state, result = change(state)
            if new_state is not state:
                await self._write(new_state)
            return result

    def _fresh_id(self, existing: Sequence[object]) -> str:
        taken = {getattr(e, "id") for e in existing}
        while True:
            candidate = self._new_id()
            if candidate not in taken:
                return candidate

    # Admin CRUD
    async def add_admin(self, admin: NewAdmin, *, guard: Optional[StateGuard] = None) -> AdminUser:
        def change(state: AppState):
            if guard:
                guard(state)
            created = AdminUser(id=self._fresh_id(state.admins), name=admin.name, username=admin.username)
            return replace(state, admins=state.admins + (created,)), created

        created = await self._mutate(change)
        logger.info("Added admin %s", created.id)
        return created

    async def update_admin(self, admin_id: str, admin: NewAdmin) -> Optional[AdminUser]:
        def change(state: AppState):
            admins, found = _replace_by_id(
                state.admins, admin_id, lambda a: replace(a, name=admin.name, username=admin.username)
            )
            if found is None:
                return state, None
            return replace(state, admins=admins), found

        return await self._mutate(change)

    async def delete_admin(self, admin_id: str) -> bool:
        def change(state: AppState):
            admins = _without_id(state.admins, admin_id)
            if len(admins) == len(state.admins):
                return state, False
            return replace(state, admins=admins), True

        return await self._mutate(change)

    # Driver CRUD
    async def add_driver(self, driver: NewDriver, *, guard: Optional[StateGuard] = None) -> Driver:
        def change(state: AppState):
            if guard:
                guard(state)
            created = Driver(
                id=self._fresh_id(state.drivers),
                driver_name=driver.driver_name,
                phone_number=driver.phone_number,
                van_number_plate=driver.van_number_plate,
                route_name=driver.route_name,
            )
            return replace(state, drivers=state.drivers + (created,)), created

        created = await self._mutate(change)
        logger.info("Added driver %s", created.id)
        return created

    async def update_driver(
        self, driver_id: str, driver: NewDriver, *, guard: Optional[StateGuard] = None
    ) -> Optional[Driver]:
        def change(state: AppState):
            if guard:
                guard(state)
            drivers, found = _replace_by_id(
                state.drivers,
                driver_id,
                lambda d: replace(
                    d,
                    driver_name=driver.driver_name,
                    phone_number=driver.phone_number,
                    van_number_plate=driver.van_number_plate,
                    route_name=driver.route_name,
                ),
            )
            if found is None:
                return state, None
            return replace(state, drivers=drivers), found

        return await self._mutate(change)

    async def delete_driver(self, driver_id: str) -> bool:
        def change(state: AppState):
            drivers = _without_id(state.drivers, driver_id)
            if len(drivers) == len(state.drivers):
                return state, False
            return replace(state, drivers=drivers), True

        deleted = await self._mutate(change)
        if deleted:
            logger.info("Deleted driver %s", driver_id)
        return deleted

    # Student CRUD
    async def add_student(self, student: NewStudent, *, guard: Optional[StateGuard] = None) -> Student:
        def change(state: AppState):
            if guard:
                guard(state)
            created = Student(
                id=self._fresh_id(state.students),
                student_name=student.student_name,
                class_grade=student.class_grade,
                parent_name=student.parent_name,
                parent_phone=student.parent_phone,
                home_location=student.home_location,
                driver_id=student.driver_id,
                status=INITIAL_STATUS,
            )
            return replace(state, students=state.students + (created,)), created

        created = await self._mutate(change)
        logger.info("Added student %s", created.id)
        return created

    async def update_student(
        self, student_id: str, student: NewStudent, *, guard: Optional[StateGuard] = None
    ) -> Optional[Student]:
        def change(state: AppState):
            if guard:
                guard(state)
            students, found = _replace_by_id(
                state.students,
                student_id,
                lambda s: replace(
                    s,
                    student_name=student.student_name,
                    class_grade=student.class_grade,
                    parent_name=student.parent_name,
                    parent_phone=student.parent_phone,
                    home_location=student.home_location,
                    driver_id=student.driver_id,
                ),
            )
            if found is None:
                return state, None
            return replace(state, students=students), found

        return await self._mutate(change)

    async def update_student_status(
        self, student_id: str, new_status: StudentStatus, *, guard: Optional[StudentGuard] = None
    ) -> Optional[Student]:
        def move(student: Student) -> Student:
            if guard:
                guard(student)
            return replace(student, status=validate_transition(student.status, new_status))

        def change(state: AppState):
            # Guard and transition are checked inside the lock against the stored student.
            students, found = _replace_by_id(state.students, student_id, move)
            if found is None:
                return state, None
            return replace(state, students=students), found

        updated = await self._mutate(change)
        if updated is not None:
            logger.debug("Student %s is now %s", student_id, updated.status.value)
        return updated

    async def delete_student(self, student_id: str) -> bool:
        def change(state: AppState):
            students = _without_id(state.students, student_id)
            if len(students) == len(state.students):
                return state, False
            return replace(state, students=students), True

        return await self._mutate(change)

    async def reset_trip_statuses(self, driver_id: Optional[str] = None) -> int:
        def change(state: AppState):
            count = 0
            students: List[Student] = []
            for s in state.students:
                if s.status != INITIAL_STATUS and (driver_id is None or s.driver_id == driver_id):
                    s = replace(s, status=INITIAL_STATUS)
                    count += 1
                students.append(s)
            if not count:
                return state, 0
            return replace(state, students=tuple(students)), count

        count = await self._mutate(change)
        logger.info("Reset %s student(s) to %s", count, INITIAL_STATUS.value)
        return count

    # Queries
    async def find_admin_by_id(self, admin_id: str) -> Optional[AdminUser]:
        state = await self.load()
        return next((a for a in state.admins if a.id == admin_id), None)

    async def find_driver_by_id(self, driver_id: str) -> Optional[Driver]:
        state = await self.load()
        return next((d for d in state.drivers if d.id == driver_id), None)

    async def find_student_by_id(self, student_id: str) -> Optional[Student]:
        state = await self.load()
        return next((s for s in state.students if s.id == student_id), None)

    async def find_students_by_driver(self, driver_id: str) -> Sequence[Student]:
        state = await self.load()
        return [s for s in state.students if s.driver_id == driver_id]

    async def list_admins(self) -> Sequence[AdminUser]:
        return list((await self.load()).admins)

    async def list_drivers(self) -> Sequence[Driver]:
        return list((await self.load()).drivers)

    async def list_students(self) -> Sequence[Student]:
        return list((await self.load()).students)
