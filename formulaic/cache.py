"""Simple TTL-based in-memory cache manager."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple


class CacheManager:
    """A minimal TTL cache for formula lookups.

    Entries are evicted lazily: a stale entry is removed the moment a ``get``
    finds it, never by a background sweep. One lock guards every operation.
    """

    def __init__(self, ttl: float = 300):
        if ttl < 0:
            raise ValueError("Cache TTL must be non-negative")
        self._store: Dict[str, Tuple[Any, datetime]] = {}
        self._ttl = timedelta(seconds=ttl)
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl.total_seconds()

    def get(self, key: str) -> Optional[Any]:
        """Get cached value if it has not expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if datetime.now() - stored_at < self._ttl:
                return value
            # Expired; delete and return None
            del self._store[key]
            return None

    def set(self, key: str, value: Any) -> None:
        """Cache a value with current timestamp."""
        with self._lock:
            self._store[key] = (value, datetime.now())

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
