from __future__ import annotations

import logging
from typing import Union

from ..core.enums import Role
from ..core.exceptions import InvalidCredentialsError
from ..fleet.repository import FleetRepository
from .model import Principal
from .policy import CredentialPolicy

logger = logging.getLogger(__name__)

DRIVER_LOGIN_FAILED = "Driver not found or plate number mismatch"


class AuthService:
    """Use case: authenticate a principal for the chosen role (login)."""

    def __init__(self, fleet: FleetRepository, policy: CredentialPolicy):
        self._fleet = fleet
        self._policy = policy

    async def authenticate(self, role: Union[Role, str], username: str, secret: str) -> Principal:
        try:
            role = Role(role)
        except ValueError:
            logger.warning("Login rejected for unknown role %r", role)
            raise InvalidCredentialsError(role)

        if role == Role.DRIVER:
            return await self._authenticate_driver(username, secret)

        credential = self._policy.role_credential(role)
        if (
            credential
            and username == credential.username
            and self._policy.check_role_secret(credential, secret)
        ):
            return credential.to_principal(role)

        logger.warning("Invalid %s login for %r", role.value, username)
        raise InvalidCredentialsError(role)

    async def _authenticate_driver(self, username: str, secret: str) -> Principal:
        wanted = (username or "").lower()
        for driver in await self._fleet.list_drivers():
            if driver.driver_name.lower() == wanted and self._policy.check_driver_secret(driver, secret):
                return Principal(id=driver.id, role=Role.DRIVER, name=driver.driver_name)

        logger.warning("Invalid DRIVER login for %r", username)
        raise InvalidCredentialsError(Role.DRIVER, DRIVER_LOGIN_FAILED)
