from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.cache import caches
from django.core.management import call_command
from django.core.management.base import CommandError

from weather_fakes import current_payload, forecast_payload

OWM = "https://owm.test/data/2.5"


@pytest.fixture(autouse=True)
def _clear_favorites():
    caches["favorites"].clear()
    yield
    caches["favorites"].clear()


def _run(*args: str) -> dict:
    out = StringIO()
    call_command("weather_fetch", *args, stdout=out)
    return json.loads(out.getvalue())


def test_city_lookup_in_fahrenheit(requests_mock):
    requests_mock.get(f"{OWM}/weather", json=current_payload())
    requests_mock.get(f"{OWM}/forecast", json=forecast_payload())

    payload = _run("--city", "Paris", "--unit", "fahrenheit")

    assert payload["current"]["temperature"] == "64.4 °F"
    assert len(payload["forecast"]) == 3


def test_add_and_list_favorites(requests_mock):
    requests_mock.get(f"{OWM}/weather", json=current_payload())
    requests_mock.get(f"{OWM}/forecast", json=forecast_payload())

    payload = _run("--city", "Paris", "--add-favorite")

    assert payload["favorites"] == ["Paris"]
    assert _run("--list-favorites") == {"favorites": ["Paris"]}
    assert _run("--remove-favorite", "Paris") == {"favorites": []}


def test_locate_uses_configured_position(requests_mock):
    requests_mock.get(f"{OWM}/weather", json=current_payload())
    requests_mock.get(f"{OWM}/forecast", json=forecast_payload())

    assert _run("--locate")["status"] == "loaded"
    assert requests_mock.last_request.qs["lon"] == ["2.3522"]


def test_error_state_raises_command_error(requests_mock):
    requests_mock.get(f"{OWM}/weather", status_code=404)
    requests_mock.get(f"{OWM}/forecast", status_code=404)

    with pytest.raises(CommandError, match="Unable to fetch weather data"):
        _run("--city", "Atlantis")


def test_requires_a_source(requests_mock):
    with pytest.raises(CommandError):
        _run()

    with pytest.raises(CommandError):
        _run("--lat", "10")

    with pytest.raises(CommandError):
        _run("--city", "Paris", "--unit", "kelvin")
