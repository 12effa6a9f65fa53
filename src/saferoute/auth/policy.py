"""Credential policies consulted by the authentication gate.

The plaintext policy reproduces the legacy login: fixed admin and parent
pairs, and drivers logging in with their van number plate. The hashed policy
keeps role secrets as Werkzeug password hashes instead. Drivers still prove
their identity with the plate in both policies, since that is the only
secret stored on a driver record.
"""

from __future__ import annotations

import hmac
from typing import Mapping, Optional, Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..fleet.model import Driver
from .model import RoleCredential


class CredentialPolicy(Protocol):
    def role_credential(self, role: Role) -> Optional[RoleCredential]:
        raise NotImplementedError

    def check_role_secret(self, credential: RoleCredential, supplied: str) -> bool:
        raise NotImplementedError

    def check_driver_secret(self, driver: Driver, supplied: str) -> bool:
        raise NotImplementedError


def _equal(expected: str, supplied: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), (supplied or "").encode("utf-8"))


class PlaintextCredentialPolicy(CredentialPolicy):
    def __init__(self, credentials: Mapping[Role, RoleCredential]):
        self._credentials = dict(credentials)

    def role_credential(self, role: Role) -> Optional[RoleCredential]:
        return self._credentials.get(role)

    def check_role_secret(self, credential: RoleCredential, supplied: str) -> bool:
        return _equal(credential.secret, supplied)

    def check_driver_secret(self, driver: Driver, supplied: str) -> bool:
        return _equal(driver.van_number_plate, supplied)


class HashedCredentialPolicy(PlaintextCredentialPolicy):
    """Role secrets are stored as password hashes (see hash_secret)."""

    def check_role_secret(self, credential: RoleCredential, supplied: str) -> bool:
        try:
            return check_password_hash(credential.secret, supplied or "")
        except (ValueError, TypeError):
            # placeholder or corrupted hashes
            return False


def hash_secret(secret: str) -> str:
    return generate_password_hash(secret)


def _credential_from(config: Mapping, prefix: str) -> Optional[RoleCredential]:
    username = config.get(f"{prefix}_username")
    secret = config.get(f"{prefix}_secret")
    if not username or not secret:
        return None
    return RoleCredential(
        principal_id=str(config.get(f"{prefix}_id") or prefix),
        name=str(config.get(f"{prefix}_name") or username),
        username=str(username),
        secret=str(secret),
    )


def build_policy(auth_config: Mapping) -> CredentialPolicy:
    credentials = {}
    for role, prefix in ((Role.ADMIN, "admin"), (Role.PARENT, "parent")):
        credential = _credential_from(auth_config, prefix)
        if credential:
            credentials[role] = credential

    scheme = str(auth_config.get("scheme", "plaintext")).lower()
    if scheme == "plaintext":
        return PlaintextCredentialPolicy(credentials)
    if scheme == "hashed":
        return HashedCredentialPolicy(credentials)
    raise ValidationError(f"Unknown auth scheme: {scheme}")
