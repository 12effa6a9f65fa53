"""Backup the file-backed fleet document.

Note: only the `file` storage backend has something on disk to copy.
"""

from __future__ import annotations

import importlib
import shutil
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from saferoute.core.constants import DB_KEY
from saferoute.storage.file_storage import FileKeyValueStorage


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = settings.STORE_CONFIG
    if store.get("backend") != "file":
        raise SystemExit("Backup only applies to the file storage backend.")

    source = FileKeyValueStorage(store["path"]).path_for(DB_KEY)
    if not source.exists():
        raise SystemExit(f"Nothing to back up: {source} does not exist.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{DB_KEY}_{ts}.json"
    shutil.copy2(source, out_file)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
