from __future__ import annotations

import threading
import time
from datetime import UTC, datetime

_LOCK = threading.Lock()
_LAST_ID = 0


def new_id() -> str:
    """Return a time-based id, strictly increasing within this process."""
    global _LAST_ID
    with _LOCK:
        candidate = time.time_ns() // 1000
        if candidate <= _LAST_ID:
            candidate = _LAST_ID + 1
        _LAST_ID = candidate
    return str(candidate)


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()
