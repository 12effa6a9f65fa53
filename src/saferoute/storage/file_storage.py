from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..core.exceptions import PersistenceError
from .backend import KeyValueStorage


class FileKeyValueStorage(KeyValueStorage):
    """One JSON file per key under a root directory.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers see either the old or the new document.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        return self._root / f"{key}.json"

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, self.path_for(key))

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeError) as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, value: str) -> None:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except (OSError, UnicodeError) as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot remove {path}: {exc}") from exc
