from __future__ import annotations

import threading
import time
from typing import Any

MATCH_SEARCH = "match_search"
BRIEF_SAVED = "brief_saved"

_events: list[dict[str, Any]] = []
_lock = threading.Lock()


def record_event(event_type: str, data: dict[str, Any]) -> None:
    with _lock:
        _events.append({
            "type": event_type,
            "timestamp": time.time(),
            **data,
        })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    """Return a snapshot of recorded events, optionally of one type."""
    with _lock:
        events = list(_events)
    if event_type is None:
        return events
    return [e for e in events if e["type"] == event_type]


def clear_events() -> None:
    with _lock:
        _events.clear()
