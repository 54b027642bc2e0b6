"""Timestamp-based record identifiers, e.g. ``drv-1718035200123``."""

import time
from datetime import datetime, timezone

_last_stamp = 0


def new_id(prefix: str) -> str:
    """Return ``<prefix>-<epoch millis>``, strictly increasing within the process."""
    global _last_stamp
    stamp = int(time.time() * 1000)
    if stamp <= _last_stamp:
        stamp = _last_stamp + 1
    _last_stamp = stamp
    return f"{prefix}-{stamp}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
