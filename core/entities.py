from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class WeatherCategory(str, Enum):
    """Coarse weather category reported by the provider."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    SNOW = "Snow"
    OTHER = "Other"

    @classmethod
    def from_provider(cls, value: Optional[str]) -> "WeatherCategory":
        for category in cls:
            if category.value == value:
                return category
        return cls.OTHER


@dataclass(frozen=True)
class LocationQuery:
    """Either a free-text place (city or postal code) or a coordinate pair."""

    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def by_name(cls, text: str) -> "LocationQuery":
        return cls(name=(text or "").strip())

    @classmethod
    def by_coordinates(cls, latitude: float, longitude: float) -> "LocationQuery":
        latitude = float(latitude)
        longitude = float(longitude)
        if not -90 <= latitude <= 90:
            raise ValueError(f"latitude out of range: {latitude}")
        if not -180 <= longitude <= 180:
            raise ValueError(f"longitude out of range: {longitude}")
        return cls(latitude=latitude, longitude=longitude)

    @property
    def is_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_empty(self) -> bool:
        return not self.is_coordinates and not self.name


@dataclass(frozen=True)
class CurrentConditions:
    """Current observation for a location.

    Measurements are stored in the provider's metric units:
    - temperature in Celsius
    - humidity in percent
    - wind speed in metres per second (m/s)
    """

    name: str
    country: str
    temperature_c: float
    humidity: int
    wind_speed_ms: float
    category: WeatherCategory
    description: str
    observed_at: datetime


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: datetime
    temperature_c: float
    humidity: int
    wind_speed_ms: float
    category: WeatherCategory
    description: str


@dataclass(frozen=True)
class ForecastSet:
    """Chronological forecast entries in the order the provider returned them."""

    name: str
    country: str
    entries: Tuple[ForecastEntry, ...] = ()

    def head(self, count: int = 3) -> Tuple[ForecastEntry, ...]:
        return self.entries[:count]


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class DashboardViewState:
    """Snapshot of what the dashboard currently shows.

    ``current`` and ``forecast`` always come from the same lookup. While
    loading, the previous lookup's data is kept until a new result arrives.
    """

    status: ViewStatus = ViewStatus.IDLE
    current: Optional[CurrentConditions] = None
    forecast: Tuple[ForecastEntry, ...] = field(default_factory=tuple)
    error: Optional[str] = None
    sequence: int = 0

    @property
    def has_data(self) -> bool:
        return self.status is ViewStatus.LOADED and self.current is not None


__all__ = [
    "CurrentConditions",
    "DashboardViewState",
    "ForecastEntry",
    "ForecastSet",
    "LocationQuery",
    "ViewStatus",
    "WeatherCategory",
]
