"""In-memory result cache with a fixed time-to-live.

The cache is an optimisation only: with ``ttl <= 0`` every ``get`` is a miss
and ``set`` is a no-op, so callers always fall through to live extraction.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Generic, Optional, TypeVar

from cachetools import TTLCache

V = TypeVar("V")


class ResultCache(Generic[V]):
    """Thread-safe ``key -> value`` map whose entries expire ``ttl`` seconds after ``set``."""

    def __init__(
        self,
        ttl: float,
        maxsize: int = 512,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._lock = threading.Lock()
        self._data: Optional[TTLCache[str, V]] = (
            TTLCache(maxsize=maxsize, ttl=ttl, timer=timer) if ttl > 0 else None
        )
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self._data is not None

    def get(self, key: str) -> Optional[V]:
        """Return the cached value, or ``None`` on a miss or an expired entry."""
        with self._lock:
            value = self._data.get(key) if self._data is not None else None
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
        return value

    def set(self, key: str, value: V) -> None:
        if self._data is None:
            return
        with self._lock:
            self._data[key] = value

    def purge(self) -> int:
        """Drop expired entries now; returns how many were removed."""
        if self._data is None:
            return 0
        with self._lock:
            return len(self._data.expire())

    def clear(self) -> None:
        if self._data is not None:
            with self._lock:
                self._data.clear()

    def __len__(self) -> int:
        if self._data is None:
            return 0
        with self._lock:
            return len(self._data)

    def stats(self) -> dict[str, Any]:
        return {"size": len(self), "hits": self.hits, "misses": self.misses, "ttl": self.ttl}
