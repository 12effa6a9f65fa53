from __future__ import annotations

from dataclasses import dataclass

from .attendance.service import AttendanceService
from .auth.policy import CredentialPolicy, build_policy
from .auth.service import AuthService
from .fleet.document_repository import DocumentFleetRepository
from .fleet.service import FleetService
from .storage.backend import KeyValueStorage
from .storage.factory import create_storage


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    fleet_repo: DocumentFleetRepository
    credential_policy: CredentialPolicy

    auth_service: AuthService
    fleet_service: FleetService
    attendance_service: AttendanceService


def build_container(*, store_config: dict, auth_config: dict) -> Container:
    storage = create_storage(store_config)
    fleet_repo = DocumentFleetRepository(storage)
    credential_policy = build_policy(auth_config)

    auth_service = AuthService(fleet_repo, credential_policy)
    fleet_service = FleetService(fleet_repo)
    attendance_service = AttendanceService(fleet_repo)

    return Container(
        storage=storage,
        fleet_repo=fleet_repo,
        credential_policy=credential_policy,
        auth_service=auth_service,
        fleet_service=fleet_service,
        attendance_service=attendance_service,
    )
