"""Builds dashboard controllers from Django settings."""
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.core.cache import caches

from core.geolocation import Geolocator, IPGeolocator, StaticGeolocator
from core.providers.base import RequestConfig
from core.providers.openweather import OpenWeatherClient
from core.services.dashboard import DashboardController
from core.storage import CacheStorage
from core.units import TemperatureUnit


def build_weather_client() -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        request_config=RequestConfig(timeout=settings.OPENWEATHER_TIMEOUT),
    )


def build_geolocator() -> Optional[Geolocator]:
    mode = settings.GEOLOCATION_MODE
    if mode == "static":
        return StaticGeolocator(float(settings.GEOLOCATION_LAT), float(settings.GEOLOCATION_LON))
    if mode == "ip":
        return IPGeolocator(url=settings.GEOLOCATION_URL, timeout=settings.GEOLOCATION_TIMEOUT)
    return None


def build_dashboard(unit: TemperatureUnit = TemperatureUnit.CELSIUS) -> DashboardController:
    return DashboardController(
        client=build_weather_client(),
        storage=CacheStorage(caches[settings.FAVORITES_CACHE_ALIAS]),
        geolocator=build_geolocator(),
        geolocation_timeout=settings.GEOLOCATION_TIMEOUT,
        unit=unit,
    )
