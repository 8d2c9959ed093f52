from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from ..entities import (
    CurrentConditions,
    DashboardViewState,
    ForecastSet,
    LocationQuery,
    ViewStatus,
)
from ..favorites import FavoritesList
from ..geolocation import DEFAULT_TIMEOUT, GeolocationDenied, Geolocator, resolve_position
from ..providers.base import WeatherClientError
from ..rendering import render_state
from ..storage import KeyValueStorage
from ..units import TemperatureUnit


class WeatherClient(Protocol):
    def fetch_current_by_name(self, place: str) -> CurrentConditions:
        ...

    def fetch_forecast_by_name(self, place: str) -> ForecastSet:
        ...

    def fetch_current_by_coordinates(self, latitude: float, longitude: float) -> CurrentConditions:
        ...

    def fetch_forecast_by_coordinates(self, latitude: float, longitude: float) -> ForecastSet:
        ...


class DashboardController:
    """Owns the dashboard view state and drives lookups against a weather client.

    Every user action that starts a lookup takes a new sequence number; a
    lookup may only publish its result while it is still the newest one, so a
    slow earlier lookup never overwrites a later one.
    """

    SEARCH_ERROR = "Unable to fetch weather data. Please try again."
    LOCATE_ERROR = "Failed to fetch data using geolocation."
    GEOLOCATION_DENIED = "Geolocation is not supported or permission denied."
    GEOLOCATION_UNSUPPORTED = "Geolocation is not supported by this device."
    FORECAST_LENGTH = 3

    def __init__(
        self,
        *,
        client: WeatherClient,
        storage: KeyValueStorage,
        geolocator: Optional[Geolocator] = None,
        geolocation_timeout: float = DEFAULT_TIMEOUT,
        unit: TemperatureUnit = TemperatureUnit.CELSIUS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client
        self.geolocator = geolocator
        self.geolocation_timeout = geolocation_timeout
        self._favorites = FavoritesList(storage)
        self._unit = unit
        self._query = ""
        self._state = DashboardViewState()
        self._sequence = 0
        self._lock = threading.Lock()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Properties ---------------------------------------------------------
    @property
    def state(self) -> DashboardViewState:
        with self._lock:
            return self._state

    @property
    def unit(self) -> TemperatureUnit:
        return self._unit

    @property
    def query(self) -> str:
        return self._query

    @property
    def favorites(self) -> Tuple[str, ...]:
        return self._favorites.names

    # Lookups ------------------------------------------------------------
    def search(self, query: str) -> DashboardViewState:
        location = LocationQuery.by_name(query)
        self._query = location.name or ""
        if location.is_empty:
            return self.clear()
        sequence = self._begin()
        return self._lookup(sequence, location, self.SEARCH_ERROR)

    def search_coordinates(self, latitude: float, longitude: float) -> DashboardViewState:
        location = LocationQuery.by_coordinates(latitude, longitude)
        sequence = self._begin()
        return self._lookup(sequence, location, self.SEARCH_ERROR)

    def select_favorite(self, name: str) -> DashboardViewState:
        return self.search(name)

    def locate(self) -> DashboardViewState:
        sequence = self._begin()
        if self.geolocator is None:
            self._log.info("Geolocation requested but no geolocator is configured")
            return self._publish(sequence, self._error(sequence, self.GEOLOCATION_UNSUPPORTED))
        try:
            latitude, longitude = resolve_position(self.geolocator, self.geolocation_timeout)
            location = LocationQuery.by_coordinates(latitude, longitude)
        except (GeolocationDenied, ValueError) as exc:
            self._log.warning("Geolocation failed: %s", exc)
            return self._publish(sequence, self._error(sequence, self.GEOLOCATION_DENIED))
        return self._lookup(sequence, location, self.LOCATE_ERROR)

    def clear(self) -> DashboardViewState:
        with self._lock:
            self._sequence += 1
            self._state = DashboardViewState(sequence=self._sequence)
            return self._state

    # Units --------------------------------------------------------------
    def toggle_unit(self) -> TemperatureUnit:
        self._unit = self._unit.toggled()
        return self._unit

    def set_unit(self, unit: TemperatureUnit) -> TemperatureUnit:
        self._unit = unit
        return self._unit

    # Favorites ----------------------------------------------------------
    def add_favorite(self) -> bool:
        state = self.state
        if not state.has_data:
            self._log.info("Cannot add a favorite without a loaded location")
            return False
        return self._favorites.add(state.current.name)

    def remove_favorite(self, name: str) -> bool:
        return self._favorites.remove(name)

    # Rendering ----------------------------------------------------------
    def render(self, today: Optional[date] = None) -> Dict[str, Any]:
        return render_state(self.state, self._unit, self.favorites, today=today)

    # Helpers ------------------------------------------------------------
    def _begin(self) -> int:
        with self._lock:
            self._sequence += 1
            self._state = replace(
                self._state, status=ViewStatus.LOADING, error=None, sequence=self._sequence
            )
            return self._sequence

    def _publish(self, sequence: int, state: DashboardViewState) -> DashboardViewState:
        with self._lock:
            if sequence != self._sequence:
                self._log.info(
                    "Discarding result of lookup %s superseded by lookup %s", sequence, self._sequence
                )
                return self._state
            self._state = state
            return state

    def _lookup(self, sequence: int, location: LocationQuery, message: str) -> DashboardViewState:
        fetch_current, fetch_forecast = self._calls(location)
        results: List[Any] = []
        failures: List[WeatherClientError] = []
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard") as executor:
            futures = [executor.submit(fetch_current), executor.submit(fetch_forecast)]
            for future in futures:
                try:
                    results.append(future.result())
                except WeatherClientError as exc:
                    failures.append(exc)

        if failures:
            self._log.warning("Lookup %s for %s failed: %s", sequence, _describe(location), failures[0])
            return self._publish(sequence, self._error(sequence, message))

        current, forecast = results
        return self._publish(
            sequence,
            DashboardViewState(
                status=ViewStatus.LOADED,
                current=current,
                forecast=forecast.head(self.FORECAST_LENGTH),
                sequence=sequence,
            ),
        )

    def _calls(self, location: LocationQuery) -> Tuple[Callable[[], Any], Callable[[], Any]]:
        if location.is_coordinates:
            lat, lon = location.latitude, location.longitude
            return (
                lambda: self.client.fetch_current_by_coordinates(lat, lon),
                lambda: self.client.fetch_forecast_by_coordinates(lat, lon),
            )
        name = location.name
        return (
            lambda: self.client.fetch_current_by_name(name),
            lambda: self.client.fetch_forecast_by_name(name),
        )

    @staticmethod
    def _error(sequence: int, message: str) -> DashboardViewState:
        return DashboardViewState(status=ViewStatus.ERROR, error=message, sequence=sequence)


def _describe(location: LocationQuery) -> str:
    if location.is_coordinates:
        return f"({location.latitude:.4f}, {location.longitude:.4f})"
    return repr(location.name)


__all__ = ["DashboardController", "WeatherClient"]
