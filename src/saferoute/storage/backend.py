from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """Interface for one-slot-per-key persistence.

    Backends store opaque UTF-8 text and raise PersistenceError on failure.
    """

    async def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def remove_item(self, key: str) -> None:
        raise NotImplementedError
