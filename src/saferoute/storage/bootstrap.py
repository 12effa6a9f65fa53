from __future__ import annotations

import logging
from dataclasses import dataclass

from ..fleet.model import NewAdmin, NewDriver, NewStudent
from ..fleet.repository import FleetRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    admins: int = 0
    drivers: int = 0
    students: int = 0


async def ensure_demo_fleet(fleet: FleetRepository) -> SeedResult:
    """Provision the demo admin, driver and roster into an empty store.

    Existing admins or drivers are left alone, so running it twice is safe.
    """

    state = await fleet.load()
    admins = drivers = students = 0

    if not any(a.username == "Admin" for a in state.admins):
        await fleet.add_admin(NewAdmin(name="Super Admin", username="Admin"))
        admins += 1

    if not state.drivers:
        driver = await fleet.add_driver(
            NewDriver(
                driver_name="Mr. Roberts",
                phone_number="555-0199",
                van_number_plate="V-402",
                route_name="Morning Run - North",
            )
        )
        drivers += 1
        for name, grade, parent, phone, location in (
            ("Leo M.", "2", "Emma", "555-123", "Maple Ave"),
            ("Sarah K.", "4", "John", "555-456", "Oak St"),
        ):
            await fleet.add_student(
                NewStudent(
                    student_name=name,
                    class_grade=grade,
                    parent_name=parent,
                    parent_phone=phone,
                    home_location=location,
                    driver_id=driver.id,
                )
            )
            students += 1

    result = SeedResult(admins=admins, drivers=drivers, students=students)
    logger.info("Demo seed: %s", result)
    return result
