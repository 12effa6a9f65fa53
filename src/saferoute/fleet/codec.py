from __future__ import annotations

import json

from ..core.exceptions import PersistenceError
from .model import AppState


def encode_state(state: AppState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False)


def decode_state(raw: str) -> AppState:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return AppState.from_dict(data)
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise PersistenceError(f"Malformed fleet document: {exc}") from exc
