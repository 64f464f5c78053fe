from __future__ import annotations

import logging
import time
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

_DEFAULT_TTL = 3600  # 1 hour


@runtime_checkable
class CacheGateway(Protocol):
    def has(self, key: str) -> bool: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def put(self, key: str, value: Any, ttl: int = _DEFAULT_TTL) -> bool: ...

    def forget(self, key: str) -> bool: ...

    def flush(self) -> bool: ...

    def stats(self) -> dict: ...


class InMemoryCache:
    """Process-local key/value store whose entries expire after their TTL."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._hits = 0
        self._misses = 0

    def _live_entry(self, key: str) -> dict[str, Any] | None:
        entry = self._entries.get(key)
        if entry and self._clock() < entry["expires_at"]:
            return entry
        if entry:
            del self._entries[key]
        return None

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if now >= e["expires_at"]]:
            del self._entries[key]

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._live_entry(key)
        if entry is None:
            self._misses += 1
            return default
        self._hits += 1
        return entry["value"]

    def put(self, key: str, value: Any, ttl: int = _DEFAULT_TTL) -> bool:
        self._purge_expired()
        self._entries[key] = {"value": value, "expires_at": self._clock() + ttl}
        return True

    def forget(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def flush(self) -> bool:
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        return True

    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }


class SafeCache:
    """Wrap a cache store so that store failures are logged and read as misses."""

    def __init__(self, store: CacheGateway) -> None:
        self.store = store

    def has(self, key: str) -> bool:
        try:
            return self.store.has(key)
        except Exception:
            logger.error("Cache has() failed for key %r", key, exc_info=True)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self.store.get(key, default)
        except Exception:
            logger.error("Cache get() failed for key %r", key, exc_info=True)
            return default

    def put(self, key: str, value: Any, ttl: int = _DEFAULT_TTL) -> bool:
        try:
            return self.store.put(key, value, ttl)
        except Exception:
            logger.error("Cache put() failed for key %r (ttl=%s)", key, ttl, exc_info=True)
            return False

    def forget(self, key: str) -> bool:
        try:
            return self.store.forget(key)
        except Exception:
            logger.error("Cache forget() failed for key %r", key, exc_info=True)
            return False

    def flush(self) -> bool:
        try:
            return self.store.flush()
        except Exception:
            logger.error("Cache flush() failed", exc_info=True)
            return False

    def stats(self) -> dict:
        try:
            return self.store.stats()
        except Exception:
            logger.error("Cache stats() failed", exc_info=True)
            return {}
