from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")
os.environ.setdefault("OPENWEATHER_BASE_URL", "https://owm.test/data/2.5")
os.environ.setdefault("GEOLOCATION_MODE", "static")
os.environ.setdefault("GEOLOCATION_LAT", "48.8566")
os.environ.setdefault("GEOLOCATION_LON", "2.3522")

django.setup()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker
