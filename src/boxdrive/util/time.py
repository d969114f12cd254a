from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def from_epoch(value: Any) -> Optional[datetime]:
    """
    Convert a Box timestamp (seconds since the epoch) into tz-aware UTC datetime.

    Box sends timestamps as decimal strings ("1325376000"); ints are accepted
    too. Returns None for missing or unparseable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        if not s.isdigit():
            return None
        value = int(s)
    if not isinstance(value, int):
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
