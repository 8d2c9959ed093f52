from __future__ import annotations

import threading

import pytest
import responses

from core.geolocation import GeolocationDenied, IPGeolocator, StaticGeolocator, resolve_position
from weather_fakes import FakeGeolocator

GEO_URL = "https://geo.test/json/"


def test_ip_geolocator_reads_position():
    with responses.RequestsMock() as rsps:
        rsps.add("GET", GEO_URL, json={"latitude": 52.52, "longitude": 13.405, "city": "Berlin"}, status=200)

        assert IPGeolocator(url=GEO_URL).current_position() == (52.52, 13.405)
        assert len(rsps.calls) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {"error": True, "reason": "RateLimited"}, "status": 429},
        {"json": {"city": "Berlin"}, "status": 200},
        {"body": "not json", "status": 200},
    ],
)
def test_ip_geolocator_failures_are_denials(kwargs):
    with responses.RequestsMock() as rsps:
        rsps.add("GET", GEO_URL, **kwargs)

        with pytest.raises(GeolocationDenied):
            IPGeolocator(url=GEO_URL).current_position()


def test_static_geolocator():
    assert resolve_position(StaticGeolocator("48.85", 2.35)) == (48.85, 2.35)


def test_resolve_position_times_out():
    release = threading.Event()
    try:
        with pytest.raises(GeolocationDenied):
            resolve_position(FakeGeolocator((1.0, 2.0), delay=release), timeout=0.05)
    finally:
        release.set()


@pytest.mark.parametrize(
    "geolocator",
    [
        FakeGeolocator(error=OSError("location service unavailable")),
        FakeGeolocator(error=RuntimeError("driver crashed")),
        FakeGeolocator(("north", "east")),
        FakeGeolocator((1.0,)),
    ],
    ids=["os-error", "runtime-error", "non-numeric", "short-tuple"],
)
def test_resolve_position_reports_any_failure_as_denial(geolocator):
    with pytest.raises(GeolocationDenied):
        resolve_position(geolocator, timeout=1.0)
