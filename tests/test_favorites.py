from __future__ import annotations

import json

import pytest
from django.core.cache import caches

from core.favorites import FAVORITES_KEY, FavoritesList
from core.storage import CacheStorage, InMemoryStorage
from weather_fakes import FailingStorage


def test_starts_empty_without_stored_value():
    assert FavoritesList(InMemoryStorage()).names == ()


def test_add_persists_json_in_insertion_order():
    storage = InMemoryStorage()
    favorites = FavoritesList(storage)

    favorites.add("Paris")
    favorites.add("Berlin")
    favorites.add("Paris")

    assert favorites.names == ("Paris", "Berlin")
    assert json.loads(storage.get(FAVORITES_KEY)) == ["Paris", "Berlin"]


def test_remove_absent_is_noop():
    storage = InMemoryStorage({FAVORITES_KEY: json.dumps(["Paris"])})
    favorites = FavoritesList(storage)

    assert favorites.remove("Tokyo") is False
    assert favorites.names == ("Paris",)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("not json", ()),
        (json.dumps({"Paris": 1}), ()),
        (json.dumps(["Paris", 3, "Paris", ""]), ("Paris",)),
    ],
)
def test_unreadable_values_are_dropped(raw, expected):
    assert FavoritesList(InMemoryStorage({FAVORITES_KEY: raw})).names == expected


def test_failing_storage_is_best_effort():
    storage = FailingStorage(fail_reads=True)
    favorites = FavoritesList(storage)

    assert favorites.add("Paris") is True
    assert favorites.remove("Paris") is True
    assert storage.writes == 2
    assert len(favorites) == 0


def test_cache_storage_survives_new_list_instances():
    cache = caches["favorites"]
    cache.clear()
    FavoritesList(CacheStorage(cache)).add("Lisbon")

    reloaded = FavoritesList(CacheStorage(cache))

    assert reloaded.names == ("Lisbon",)
    assert "Lisbon" in reloaded
    cache.clear()
