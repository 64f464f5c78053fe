from __future__ import annotations

import time
from collections import deque
from typing import Any

MAX_EVENTS = 10_000

# Oldest events fall off once the log is full
_events: deque[dict[str, Any]] = deque(maxlen=MAX_EVENTS)


def record_event(event_type: str, data: dict[str, Any]) -> None:
    """Append a search telemetry event stamped with its type and wall-clock time."""
    _events.append({**data, "type": event_type, "timestamp": time.time()})


def get_events(event_type: str | None = None, since: float | None = None) -> list[dict[str, Any]]:
    """Return a snapshot of recorded events, optionally by type and minimum timestamp."""
    return [
        e for e in _events
        if (event_type is None or e["type"] == event_type)
        and (since is None or e["timestamp"] >= since)
    ]


def clear_events() -> None:
    _events.clear()
