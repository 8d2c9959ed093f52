"""String key/value storage used to persist dashboard preferences.

The dashboard only needs synchronous ``get``/``set`` of string values, so any
backend offering that can be injected.  :class:`InMemoryStorage` is the fake
used by the tests; :class:`CacheStorage` adapts a Django cache backend (a
file-based cache in production, so favorites survive restarts).
"""
from __future__ import annotations

from typing import Dict, Optional, Protocol

from django.core.cache.backends.base import BaseCache


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStorage:
    """Dict-backed storage living as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class CacheStorage:
    """Store values in a Django cache without expiry."""

    def __init__(self, cache: BaseCache) -> None:
        self._cache = cache

    def get(self, key: str) -> Optional[str]:
        value = self._cache.get(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._cache.set(key, value, timeout=None)


__all__ = ["CacheStorage", "InMemoryStorage", "KeyValueStorage"]
