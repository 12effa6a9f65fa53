"""Identity generator for new entities.

Ids are 128-bit random hex tokens. When the platform has no random source,
a process-wide counter seeded from the wall clock keeps ids unique for the
lifetime of the process.
"""

from __future__ import annotations

import itertools
import logging
import secrets
import threading
import time

from ..core.constants import ID_HEX_BYTES

logger = logging.getLogger(__name__)

_fallback_lock = threading.Lock()
_fallback_counter = itertools.count(time.time_ns())


def new_id() -> str:
    try:
        return secrets.token_hex(ID_HEX_BYTES)
    except NotImplementedError:
        logger.warning("No random source available, using counter ids")
        with _fallback_lock:
            value = next(_fallback_counter)
        return f"{value:0{ID_HEX_BYTES * 2}x}"
