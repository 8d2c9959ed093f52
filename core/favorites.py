from __future__ import annotations

import json
import logging
from typing import List, Tuple

from .storage import KeyValueStorage


logger = logging.getLogger(__name__)

FAVORITES_KEY = "weather-dashboard:favorites"


class FavoritesList:
    """Ordered, unique list of location names persisted in a key/value store.

    The in-memory list is authoritative for the session: a failing store is
    logged and otherwise ignored.
    """

    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_KEY) -> None:
        self._storage = storage
        self._key = key
        self._names: List[str] = self._load()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def add(self, name: str) -> bool:
        if not name or name in self._names:
            return False
        self._names.append(name)
        self._persist()
        return True

    def remove(self, name: str) -> bool:
        if name not in self._names:
            return False
        self._names = [item for item in self._names if item != name]
        self._persist()
        return True

    # Helpers ------------------------------------------------------------
    def _load(self) -> List[str]:
        try:
            raw = self._storage.get(self._key)
        except Exception as exc:  # noqa: BLE001 - storage failures must not break the dashboard
            logger.warning("Failed to read favorites: %s", exc)
            return []
        if not raw:
            return []
        try:
            values = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable favorites value under %s", self._key)
            return []
        if not isinstance(values, list):
            logger.warning("Ignoring favorites value of type %s", type(values).__name__)
            return []
        names: List[str] = []
        for value in values:
            if isinstance(value, str) and value and value not in names:
                names.append(value)
        return names

    def _persist(self) -> None:
        try:
            self._storage.set(self._key, json.dumps(self._names))
        except Exception as exc:  # noqa: BLE001 - persistence is best effort
            logger.warning("Failed to persist favorites: %s", exc)


__all__ = ["FAVORITES_KEY", "FavoritesList"]
