from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .base import NotFound, ProviderError, WeatherProvider
from ..entities import CurrentConditions, ForecastEntry, ForecastSet, WeatherCategory


class OpenWeatherClient(WeatherProvider):
    """OpenWeatherMap current weather and 5 day / 3 hour forecast lookups.

    The provider is always asked for metric values; conversion to the
    display unit happens in the dashboard.
    """

    base_url = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fetch_current_by_name(self, place: str) -> CurrentConditions:
        data = self._fetch("weather", self._name_params(place))
        return self._build_current(data)

    def fetch_forecast_by_name(self, place: str) -> ForecastSet:
        data = self._fetch("forecast", self._name_params(place))
        return self._build_forecast(data)

    def fetch_current_by_coordinates(self, latitude: float, longitude: float) -> CurrentConditions:
        data = self._fetch("weather", {"lat": latitude, "lon": longitude})
        return self._build_current(data)

    def fetch_forecast_by_coordinates(self, latitude: float, longitude: float) -> ForecastSet:
        data = self._fetch("forecast", {"lat": latitude, "lon": longitude})
        return self._build_forecast(data)

    # Helpers ------------------------------------------------------------
    def _name_params(self, place: str) -> Dict[str, Any]:
        place = (place or "").strip()
        if not place:
            raise NotFound("empty location")
        return {"q": place}

    def _fetch(self, endpoint: str, params: Dict[str, Any]) -> dict:
        if not self.api_key or not self.api_key.strip():
            self._log.error("OpenWeather API key is not configured")
            raise ProviderError("missing API key")
        params = dict(params, appid=self.api_key, units="metric")
        response = self._request("GET", f"{self.base_url}/{endpoint}", params=params)
        data = self._json(response)
        if not isinstance(data, dict):
            raise ProviderError("unexpected payload")
        self._log.debug("OpenWeather %s returned %s", endpoint, response.status_code)
        return data

    def _build_current(self, data: dict) -> CurrentConditions:
        try:
            sys_block = _block(data, "sys")
            measurements = _measurements(data)
            return CurrentConditions(
                name=_required_str(data, "name"),
                country=str(sys_block.get("country") or ""),
                observed_at=_parse_timestamp(data.get("dt")),
                **measurements,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            self._log.error("Malformed current weather payload: %s", exc)
            raise ProviderError("malformed current weather payload") from exc

    def _build_forecast(self, data: dict) -> ForecastSet:
        items = data.get("list")
        if not isinstance(items, list):
            raise ProviderError("missing forecast list")
        try:
            city = _block(data, "city")
            entries: List[ForecastEntry] = []
            for item in items:
                if not isinstance(item, dict):
                    raise TypeError(f"forecast entry is {type(item).__name__}")
                entries.append(
                    ForecastEntry(timestamp=_parse_timestamp(item["dt"]), **_measurements(item))
                )
            return ForecastSet(
                name=str(city.get("name") or ""),
                country=str(city.get("country") or ""),
                entries=tuple(entries),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            self._log.error("Malformed forecast payload: %s", exc)
            raise ProviderError("malformed forecast payload") from exc


def _block(payload: dict, key: str) -> dict:
    """Nested object under ``key``; absent means empty, anything but an object is malformed."""
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{key} is {type(value).__name__}, expected an object")
    return value


def _measurements(payload: dict) -> Dict[str, Any]:
    main = payload["main"]
    wind = _block(payload, "wind")
    weather = (payload.get("weather") or [{}])[0]
    if not isinstance(weather, dict):
        raise TypeError(f"weather entry is {type(weather).__name__}, expected an object")
    return {
        "temperature_c": float(main["temp"]),
        "humidity": int(main["humidity"]),
        "wind_speed_ms": float(wind["speed"]),
        "category": WeatherCategory.from_provider(weather.get("main")),
        "description": str(weather.get("description") or ""),
    }


def _required_str(payload: dict, key: str) -> str:
    value = payload[key]
    if value is None:
        raise KeyError(key)
    return str(value)


def _parse_timestamp(value: Optional[object]) -> datetime:
    if value is None:
        return datetime.now(tz=timezone.utc)
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"timestamp out of range: {value!r}") from exc


__all__ = ["OpenWeatherClient"]
