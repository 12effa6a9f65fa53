from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role, StudentStatus


@dataclass(frozen=True)
class AdminUser:
    id: str
    name: str
    username: str
    role: Role = Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "username": self.username, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminUser":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            username=data["username"],
            role=Role(data.get("role", Role.ADMIN.value)),
        )


@dataclass(frozen=True)
class Driver:
    """A van driver. The plate number is also the driver's login secret."""

    id: str
    driver_name: str
    phone_number: str
    van_number_plate: str
    route_name: str
    role: Role = Role.DRIVER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "driverName": self.driver_name,
            "phoneNumber": self.phone_number,
            "vanNumberPlate": self.van_number_plate,
            "routeName": self.route_name,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Driver":
        return cls(
            id=str(data["id"]),
            driver_name=data["driverName"],
            phone_number=data.get("phoneNumber") or "",
            van_number_plate=data["vanNumberPlate"],
            route_name=data.get("routeName") or "",
            role=Role(data.get("role", Role.DRIVER.value)),
        )


@dataclass(frozen=True)
class Student:
    """A student on a van roster.

    driver_id is a plain reference: it may be None or point at a driver that
    no longer exists, and readers show such students as unassigned.
    """

    id: str
    student_name: str
    class_grade: str
    parent_name: str
    parent_phone: str
    home_location: str
    driver_id: Optional[str]
    status: StudentStatus = StudentStatus.WAITING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "studentName": self.student_name,
            "classGrade": self.class_grade,
            "parentName": self.parent_name,
            "parentPhone": self.parent_phone,
            "homeLocation": self.home_location,
            "driverId": self.driver_id,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        return cls(
            id=str(data["id"]),
            student_name=data["studentName"],
            class_grade=str(data.get("classGrade") or ""),
            parent_name=data.get("parentName") or "",
            parent_phone=data.get("parentPhone") or "",
            home_location=data.get("homeLocation") or "",
            driver_id=data.get("driverId"),
            status=StudentStatus(data.get("status") or StudentStatus.WAITING.value),
        )


@dataclass(frozen=True)
class AppState:
    """Aggregate root: the single persisted document."""

    admins: Tuple[AdminUser, ...] = field(default_factory=tuple)
    drivers: Tuple[Driver, ...] = field(default_factory=tuple)
    students: Tuple[Student, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "AppState":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "admins": [a.to_dict() for a in self.admins],
            "drivers": [d.to_dict() for d in self.drivers],
            "students": [s.to_dict() for s in self.students],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppState":
        return cls(
            admins=tuple(AdminUser.from_dict(a) for a in data.get("admins") or []),
            drivers=tuple(Driver.from_dict(d) for d in data.get("drivers") or []),
            students=tuple(Student.from_dict(s) for s in data.get("students") or []),
        )


# Input structs: validated on construction, so the repository only ever
# receives clean field values.


@dataclass(frozen=True)
class NewAdmin:
    name: str
    username: str

    def __post_init__(self):
        object.__setattr__(self, "name", require_non_empty(self.name, "Name"))
        object.__setattr__(self, "username", require_non_empty(self.username, "Username"))


@dataclass(frozen=True)
class NewDriver:
    driver_name: str
    phone_number: str
    van_number_plate: str
    route_name: str

    def __post_init__(self):
        object.__setattr__(self, "driver_name", require_non_empty(self.driver_name, "Driver name"))
        object.__setattr__(self, "phone_number", require_non_empty(self.phone_number, "Phone number"))
        object.__setattr__(self, "van_number_plate", require_non_empty(self.van_number_plate, "Van number plate"))
        object.__setattr__(self, "route_name", require_non_empty(self.route_name, "Route name"))


@dataclass(frozen=True)
class NewStudent:
    student_name: str
    class_grade: str
    parent_name: str
    parent_phone: str
    home_location: str
    driver_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "student_name", require_non_empty(self.student_name, "Student name"))
        object.__setattr__(self, "class_grade", require_non_empty(str(self.class_grade or ""), "Class grade"))
        object.__setattr__(self, "parent_name", require_non_empty(self.parent_name, "Parent name"))
        object.__setattr__(self, "parent_phone", require_non_empty(self.parent_phone, "Parent phone"))
        object.__setattr__(self, "home_location", require_non_empty(self.home_location, "Home location"))
        object.__setattr__(self, "driver_id", optional_text(self.driver_id))
