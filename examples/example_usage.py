"""Example: drive the service layer directly (no UI).

Goal: show the flow a driver screen goes through: login, roster, pickups.
"""

import asyncio

from saferoute.core.enums import Role
from saferoute.main import start


async def main():
    container = await start()

    principal = await container.auth_service.authenticate(Role.DRIVER, "mr. roberts", "V-402")
    roster = await container.attendance_service.roster(principal.id)
    waiting = [s for s in roster if s.status.value == "WAITING"]
    if waiting:
        await container.attendance_service.mark_onboard(principal=principal, student_id=waiting[0].id)

    print(await container.attendance_service.trip_progress(principal.id))
    for row in await container.fleet_service.list_student_rows():
        print(row)


if __name__ == "__main__":
    asyncio.run(main())
