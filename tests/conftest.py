from __future__ import annotations

import pytest

from saferoute.fleet.document_repository import DocumentFleetRepository
from saferoute.fleet.model import NewDriver, NewStudent
from saferoute.storage.memory_storage import InMemoryKeyValueStorage


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def repo(storage):
    return DocumentFleetRepository(storage)


def make_driver(name="Mr. Roberts", plate="V-402", route="Morning Run - North"):
    return NewDriver(driver_name=name, phone_number="555-0199", van_number_plate=plate, route_name=route)


def make_student(name="Leo M.", driver_id=None, location="Maple Ave"):
    return NewStudent(
        student_name=name,
        class_grade="2",
        parent_name="Emma",
        parent_phone="555-123",
        home_location=location,
        driver_id=driver_id,
    )
