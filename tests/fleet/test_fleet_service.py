import asyncio

import pytest

from conftest import make_driver, make_student
from saferoute.core.enums import Role, StudentStatus
from saferoute.core.exceptions import AuthorizationError, ValidationError
from saferoute.fleet.document_repository import DocumentFleetRepository
from saferoute.fleet.model import NewAdmin
from saferoute.fleet.service import FleetService
from saferoute.storage.memory_storage import InMemoryKeyValueStorage


@pytest.fixture
def service(repo):
    return FleetService(repo)


@pytest.mark.asyncio
async def test_admin_registers_driver_and_enrolls_student(service, repo):
    driver = await service.register_driver(current_role=Role.ADMIN, driver=make_driver())
    student = await service.enroll_student(current_role=Role.ADMIN, student=make_student(driver_id=driver.id))

    assert await repo.find_students_by_driver(driver.id) == [student]


@pytest.mark.asyncio
async def test_non_admin_cannot_register_driver(service):
    with pytest.raises(AuthorizationError):
        await service.register_driver(current_role=Role.DRIVER, driver=make_driver())


@pytest.mark.asyncio
async def test_duplicate_driver_login_pair_is_rejected(service):
    await service.register_driver(current_role=Role.ADMIN, driver=make_driver("Mr. Roberts", "V-402"))

    with pytest.raises(ValidationError):
        await service.register_driver(current_role=Role.ADMIN, driver=make_driver("MR. ROBERTS", "V-402"))

    # same name on another van is a different login
    await service.register_driver(current_role=Role.ADMIN, driver=make_driver("Mr. Roberts", "V-403"))


@pytest.mark.asyncio
async def test_edit_driver_may_keep_its_own_login_pair(service):
    driver = await service.register_driver(current_role=Role.ADMIN, driver=make_driver())

    updated = await service.edit_driver(
        current_role=Role.ADMIN, driver_id=driver.id, driver=make_driver(route="Evening Run")
    )

    assert updated.route_name == "Evening Run"


@pytest.mark.asyncio
async def test_enroll_student_with_unknown_driver_is_rejected(service):
    with pytest.raises(ValidationError):
        await service.enroll_student(current_role=Role.ADMIN, student=make_student(driver_id="missing"))


@pytest.mark.asyncio
async def test_remove_unknown_entities_raise(service):
    with pytest.raises(ValidationError):
        await service.remove_driver(current_role=Role.ADMIN, driver_id="missing")
    with pytest.raises(ValidationError):
        await service.remove_student(current_role=Role.ADMIN, student_id="missing")


@pytest.mark.asyncio
async def test_student_rows_show_unassigned_for_missing_driver(service, repo):
    driver = await service.register_driver(current_role=Role.ADMIN, driver=make_driver())
    await service.enroll_student(current_role=Role.ADMIN, student=make_student("Leo M.", driver.id))
    await service.enroll_student(current_role=Role.ADMIN, student=make_student("Sarah K."))
    await service.remove_driver(current_role=Role.ADMIN, driver_id=driver.id)
    await service.enroll_student(current_role=Role.ADMIN, student=make_student("Mia P."))

    rows = await service.list_student_rows()

    assert [(r.student_name, r.driver_name, r.status) for r in rows] == [
        ("Leo M.", "Unassigned", StudentStatus.WAITING.value),
        ("Sarah K.", "Unassigned", "WAITING"),
        ("Mia P.", "Unassigned", "WAITING"),
    ]


@pytest.mark.asyncio
async def test_driver_rows_count_assigned_students(service):
    driver = await service.register_driver(current_role=Role.ADMIN, driver=make_driver())
    await service.register_driver(current_role=Role.ADMIN, driver=make_driver("Ms. Lee", "V-100"))
    await service.enroll_student(current_role=Role.ADMIN, student=make_student("A", driver.id))
    await service.enroll_student(current_role=Role.ADMIN, student=make_student("B", driver.id))

    rows = await service.list_driver_rows()

    assert [(r.driver_name, r.student_count) for r in rows] == [("Mr. Roberts", 2), ("Ms. Lee", 0)]


@pytest.mark.asyncio
async def test_provision_admin_rejects_duplicate_username(service):
    await service.provision_admin(current_role=Role.ADMIN, admin=NewAdmin(name="Super Admin", username="Admin"))

    with pytest.raises(ValidationError):
        await service.provision_admin(current_role=Role.ADMIN, admin=NewAdmin(name="Other", username="Admin"))


class SlowStorage(InMemoryKeyValueStorage):
    async def get_item(self, key):
        value = await super().get_item(key)
        await asyncio.sleep(0.01)
        return value


@pytest.fixture
def slow_repo():
    return DocumentFleetRepository(SlowStorage())


@pytest.mark.asyncio
async def test_concurrent_provision_admin_keeps_username_unique(slow_repo):
    service = FleetService(slow_repo)

    results = await asyncio.gather(
        service.provision_admin(current_role=Role.ADMIN, admin=NewAdmin(name="Super Admin", username="Admin")),
        service.provision_admin(current_role=Role.ADMIN, admin=NewAdmin(name="Other", username="Admin")),
        return_exceptions=True,
    )

    assert [type(r) for r in results if isinstance(r, Exception)] == [ValidationError]
    assert len(await slow_repo.list_admins()) == 1


@pytest.mark.asyncio
async def test_concurrent_register_driver_keeps_login_pair_unique(slow_repo):
    service = FleetService(slow_repo)

    results = await asyncio.gather(
        service.register_driver(current_role=Role.ADMIN, driver=make_driver("Mr. Roberts", "V-402")),
        service.register_driver(current_role=Role.ADMIN, driver=make_driver("mr. roberts", "V-402")),
        return_exceptions=True,
    )

    assert [type(r) for r in results if isinstance(r, Exception)] == [ValidationError]
    assert [d.driver_name for d in await slow_repo.list_drivers()] == ["Mr. Roberts"]


@pytest.mark.asyncio
async def test_concurrent_edit_driver_cannot_take_new_login_pair(slow_repo):
    service = FleetService(slow_repo)
    lee = await service.register_driver(current_role=Role.ADMIN, driver=make_driver("Ms. Lee", "V-100"))

    results = await asyncio.gather(
        service.register_driver(current_role=Role.ADMIN, driver=make_driver("Mr. Roberts", "V-402")),
        service.edit_driver(current_role=Role.ADMIN, driver_id=lee.id, driver=make_driver("MR. ROBERTS", "V-402")),
        return_exceptions=True,
    )

    assert isinstance(results[1], ValidationError)
    assert (await slow_repo.find_driver_by_id(lee.id)).driver_name == "Ms. Lee"
