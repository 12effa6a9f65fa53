from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_STORE_PATH
from ..core.exceptions import ValidationError
from .backend import KeyValueStorage
from .file_storage import FileKeyValueStorage
from .memory_storage import InMemoryKeyValueStorage


@dataclass(frozen=True)
class StorageConfig:
    backend: str
    path: str


def _as_config(store_config: dict) -> StorageConfig:
    return StorageConfig(
        backend=str(store_config.get("backend", "file")).lower(),
        path=str(store_config.get("path") or DEFAULT_STORE_PATH),
    )


def create_storage(store_config: dict) -> KeyValueStorage:
    config = _as_config(store_config)
    if config.backend == "file":
        return FileKeyValueStorage(config.path)
    if config.backend == "memory":
        return InMemoryKeyValueStorage()
    raise ValidationError(f"Unknown storage backend: {config.backend}")
