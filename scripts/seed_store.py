from __future__ import annotations

import asyncio
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from saferoute.main import create_core, load_settings
from saferoute.storage.bootstrap import ensure_demo_fleet


async def run() -> None:
    settings = load_settings()
    container = create_core(settings)
    result = await ensure_demo_fleet(container.fleet_repo)
    store = settings.STORE_CONFIG
    print(
        "OK: Seeded store -> "
        f"{store.get('backend')}:{store.get('path')} "
        f"(admins={result.admins}, drivers={result.drivers}, students={result.students})"
    )


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
