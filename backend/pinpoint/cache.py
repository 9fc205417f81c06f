from __future__ import annotations

from asyncio import Lock
import time
from typing import Any

from .config import SESSION_TTL_SECONDS


class TTLCache:
    """A simple in-memory TTL cache with async-safe access."""

    def __init__(self, ttl_seconds: float = 300.0) -> None:
        self._ttl = ttl_seconds
        self._lock = Lock()
        self._store: dict[Any, tuple[Any, float]] = {}

    async def get(self, key: Any, *, refresh: bool = False) -> Any | None:
        """Return the cached value, optionally sliding its expiry forward."""
        now = time.monotonic()
        async with self._lock:
            entry = self._store.get(key)
            if not entry:
                return None
            value, expires_at = entry
            if expires_at <= now:
                self._store.pop(key, None)
                return None
            if refresh:
                self._store[key] = (value, now + self._ttl)
            return value

    async def set(self, key: Any, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        expires_at = time.monotonic() + max(ttl, 0.0)
        async with self._lock:
            if ttl <= 0:
                self._store.pop(key, None)
            else:
                self._store[key] = (value, expires_at)

    async def invalidate(self, key: Any) -> bool:
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def purge_expired(self) -> int:
        now = time.monotonic()
        async with self._lock:
            expired = [key for key, (_, exp) in self._store.items() if exp <= now]
            for key in expired:
                self._store.pop(key, None)
            return len(expired)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()


entry_sessions = TTLCache(ttl_seconds=SESSION_TTL_SECONDS)
