"""In-process locks keyed by an identifier (e.g. one lock per room)."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List, Optional


class LockTimeout(Exception):
    """Raised when a keyed lock cannot be acquired in time."""

    def __init__(self, key: Hashable, timeout: Optional[float]):
        super().__init__(f"Could not acquire lock for {key!r} within {timeout}s")
        self.key = key
        self.timeout = timeout


class KeyedLock:
    """Hands out one mutex per key; different keys never block each other.

    Entries are reference counted and dropped once no thread holds or waits
    for them, so the registry does not grow with the number of keys seen.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[Hashable, List] = {}

    @contextmanager
    def acquire(self, key: Hashable, timeout: Optional[float] = None) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1

        lock: threading.Lock = entry[0]
        acquired = lock.acquire(timeout=-1 if timeout is None else timeout)
        try:
            if not acquired:
                raise LockTimeout(key, timeout)
            yield
        finally:
            if acquired:
                lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
