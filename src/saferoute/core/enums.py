from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of an authenticated principal."""

    ADMIN = "ADMIN"
    DRIVER = "DRIVER"
    PARENT = "PARENT"


class StudentStatus(str, Enum):
    """Pickup state of a student for the current trip cycle."""

    WAITING = "WAITING"
    ONBOARD = "ONBOARD"
    DROPPED = "DROPPED"
