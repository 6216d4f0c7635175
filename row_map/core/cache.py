"""Build-once cache for process-wide, immutable per-type metadata.

Lookups of published entries never take a lock. A miss takes a lock owned by
that key, re-checks, builds and publishes, so concurrent first use of a key
builds at most once and every reader observes the same instance. A failed
build publishes nothing and the next lookup retries.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BuildOnceCache(Generic[K, V]):
    """Concurrent map with publish-on-first-successful-build semantics.

    Args:
        builder: Called with the key on a miss; its result is published.
    """

    def __init__(self, builder: Callable[[K], V]) -> None:
        self._builder = builder
        self._entries: dict[K, V] = {}
        self._key_locks: dict[K, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, key: K) -> V:
        """Return the published value for *key*, building it if needed."""
        try:
            return self._entries[key]
        except KeyError:
            pass

        with self._lock_for(key):
            if key in self._entries:
                return self._entries[key]
            value = self._builder(key)
            self._entries[key] = value

        with self._guard:
            self._key_locks.pop(key, None)
        return value

    def _lock_for(self, key: K) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop every published entry."""
        with self._guard:
            self._entries.clear()
