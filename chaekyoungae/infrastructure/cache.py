"""In-memory result cache with wall-clock expiry."""
from __future__ import annotations

import time
from typing import Callable, Generic, Protocol, TypeVar

from chaekyoungae.domain import CacheEntry

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class ResultCache(Protocol[T]):
    """Contract for the search result cache."""

    def get(self, key: str) -> T | None: ...

    def put(self, key: str, value: T, ttl: float | None = None) -> None: ...


class TTLCache(Generic[T]):
    """Process-local cache whose entries expire a fixed time after insertion.

    Expiry is checked lazily on read; ``purge_expired`` drops every stale entry
    in one sweep.  Reads never extend an entry's lifetime and the map has no
    capacity bound.
    """

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    def put(self, key: str, value: T, ttl: float | None = None) -> None:
        lifetime = self._ttl if ttl is None else ttl
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + lifetime)

    def purge_expired(self) -> int:
        now = self._clock()
        stale = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
