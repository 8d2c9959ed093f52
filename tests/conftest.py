from __future__ import annotations

import pytest

from requests_mock import Mocker

from core.storage import InMemoryStorage
from weather_fakes import FakeWeatherClient


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def weather_client() -> FakeWeatherClient:
    client = FakeWeatherClient()
    client.add_place("Paris")
    return client
