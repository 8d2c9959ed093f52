from __future__ import annotations

import pytest
from django.apps import apps
from django.core.cache import caches
from django.test import Client

from weather_fakes import current_payload, forecast_payload

OWM = "https://owm.test/data/2.5"


@pytest.fixture(autouse=True)
def _clear_favorites():
    caches["favorites"].clear()
    yield
    caches["favorites"].clear()


def _mock_place(requests_mock, name: str = "Paris") -> None:
    requests_mock.get(f"{OWM}/weather", json=current_payload(name=name))
    requests_mock.get(f"{OWM}/forecast", json=forecast_payload(name=name))


def test_weather_endpoint_returns_payload(requests_mock) -> None:
    _mock_place(requests_mock)
    client = Client()

    response = client.get("/api/weather", {"q": "Paris", "unit": "fahrenheit"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "loaded"
    assert payload["unit"] == "fahrenheit"
    assert payload["current"]["name"] == "Paris"
    assert payload["current"]["temperature"] == "64.4 °F"
    assert len(payload["forecast"]) == 3


def test_weather_endpoint_by_coordinates(requests_mock) -> None:
    _mock_place(requests_mock, "Lyon")

    response = Client().get("/api/weather", {"lat": "45.76", "lon": "4.84"})

    assert response.status_code == 200
    assert response.json()["current"]["name"] == "Lyon"
    assert requests_mock.last_request.qs["lat"] == ["45.76"]


def test_weather_endpoint_empty_query_is_idle(requests_mock) -> None:
    response = Client().get("/api/weather", {"q": ""})

    assert response.status_code == 200
    assert response.json()["status"] == "idle"
    assert requests_mock.call_count == 0


def test_weather_endpoint_upstream_failure(requests_mock) -> None:
    requests_mock.get(f"{OWM}/weather", status_code=404, json={"message": "city not found"})
    requests_mock.get(f"{OWM}/forecast", json=forecast_payload())

    response = Client().get("/api/weather", {"q": "Atlantis"})

    assert response.status_code == 502
    payload = response.json()
    assert payload["status"] == "error"
    assert payload["error"] == "Unable to fetch weather data. Please try again."
    assert payload["current"] is None
    assert payload["forecast"] == []


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"lat": "abc", "lon": "37.61"},
        {"lat": "95", "lon": "37.61"},
        {"q": "Paris", "unit": "kelvin"},
    ],
)
def test_weather_endpoint_validates_params(requests_mock, params) -> None:
    response = Client().get("/api/weather", params)

    assert response.status_code == 400
    assert "detail" in response.json()
    assert requests_mock.call_count == 0


def test_locate_endpoint_uses_configured_position(requests_mock) -> None:
    _mock_place(requests_mock)

    response = Client().get("/api/weather/locate")

    assert response.status_code == 200
    assert requests_mock.last_request.qs["lat"] == ["48.8566"]


def test_favorites_lifecycle(requests_mock) -> None:
    _mock_place(requests_mock)
    client = Client()

    assert client.get("/api/favorites").json() == {"favorites": []}

    created = client.post("/api/favorites", {"q": "Paris"}, content_type="application/json")
    assert created.status_code == 201
    assert created.json() == {"added": True, "favorites": ["Paris"]}

    again = client.post("/api/favorites", {"q": "Paris"}, content_type="application/json")
    assert again.status_code == 200
    assert again.json()["added"] is False

    assert client.delete("/api/favorites/Paris").status_code == 204
    assert client.delete("/api/favorites/Paris").status_code == 204
    assert client.get("/api/favorites").json() == {"favorites": []}


def test_favorites_post_requires_query(requests_mock) -> None:
    response = Client().post("/api/favorites", {}, content_type="application/json")

    assert response.status_code == 400


def test_favorites_post_lookup_failure(requests_mock) -> None:
    requests_mock.get(f"{OWM}/weather", status_code=500)
    requests_mock.get(f"{OWM}/forecast", status_code=500)
    client = Client()

    response = client.post("/api/favorites", {"q": "Paris"}, content_type="application/json")

    assert response.status_code == 502
    assert client.get("/api/favorites").json() == {"favorites": []}


def test_favorite_with_slash_in_name_can_be_removed(requests_mock) -> None:
    _mock_place(requests_mock, "Frankfurt/Main")
    client = Client()

    created = client.post("/api/favorites", {"q": "Frankfurt/Main"}, content_type="application/json")
    assert created.json()["favorites"] == ["Frankfurt/Main"]

    assert client.delete("/api/favorites/Frankfurt/Main").status_code == 204
    assert client.get("/api/favorites").json() == {"favorites": []}


def test_api_serves_requests_without_auth_apps(requests_mock) -> None:
    _mock_place(requests_mock)

    assert not apps.is_installed("django.contrib.auth")
    assert not apps.is_installed("django.contrib.contenttypes")
    assert Client().get("/api/weather", {"q": "Paris"}).status_code == 200
