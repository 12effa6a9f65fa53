from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .backend import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Dict-backed storage for tests and throwaway sessions.

    Every call yields to the event loop once so callers interleave the same
    way they do against a real I/O backend.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        await asyncio.sleep(0)
        self._items.pop(key, None)
