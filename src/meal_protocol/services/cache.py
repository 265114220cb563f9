"""Simple cache abstractions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

MISSING = object()


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object:
        """Return a cached value, or ``MISSING`` if absent or expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def clear(self) -> None:
        """Drop every cached value."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """In-memory cache that can also remember ``None`` results."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return MISSING
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL, dropping expired entries."""
        if ttl_seconds <= 0:
            return
        now = datetime.now(tz=UTC)
        expired = [k for k, entry in self._entries.items() if now >= entry.expires_at]
        for expired_key in expired:
            del self._entries[expired_key]
        expires_at = now + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def clear(self) -> None:
        """Drop every cached value."""
        self._entries.clear()
