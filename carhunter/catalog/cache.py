from __future__ import annotations

import time
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Generic, Hashable, TypeVar


T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    value: T
    expires_at: float


class TTLCache(Generic[T]):
    def __init__(self, ttl_seconds: int, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = max(0, ttl_seconds)
        self._clock = clock
        self._entries: dict[Hashable, _Entry[T]] = {}
        self._lock = RLock()

    def _cleanup_locked(self, now: float) -> None:
        stale_keys = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in stale_keys:
            del self._entries[key]

    def get(self, key: Hashable) -> T | None:
        with self._lock:
            self._cleanup_locked(self._clock())
            entry = self._entries.get(key)
            return entry.value if entry is not None else None

    def set(self, key: Hashable, value: T) -> None:
        if self._ttl <= 0:
            return
        with self._lock:
            now = self._clock()
            self._cleanup_locked(now)
            self._entries[key] = _Entry(value=value, expires_at=now + self._ttl)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._cleanup_locked(self._clock())
            return len(self._entries)
