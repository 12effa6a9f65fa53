from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """The authenticated identity handed to views after login."""

    id: str
    role: Role
    name: str


@dataclass(frozen=True)
class RoleCredential:
    """A provisioned login for a role that has no records in the store."""

    principal_id: str
    name: str
    username: str
    secret: str

    def to_principal(self, role: Role) -> Principal:
        return Principal(id=self.principal_id, role=role, name=self.name)
