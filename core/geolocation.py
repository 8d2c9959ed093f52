"""Single-shot position lookup used by the "use my location" flow."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Optional, Protocol, Tuple

import requests


logger = logging.getLogger(__name__)

Position = Tuple[float, float]

DEFAULT_TIMEOUT = 10.0


class GeolocationDenied(RuntimeError):
    """Raised when the position is refused, unavailable or timed out."""


class Geolocator(Protocol):
    def current_position(self) -> Position:
        ...


class StaticGeolocator:
    """Always reports the configured position."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.position = (float(latitude), float(longitude))

    def current_position(self) -> Position:
        return self.position


class IPGeolocator:
    """Approximate the position from the caller's public IP address."""

    url = "https://ipapi.co/json/"

    def __init__(
        self,
        url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.url = url or self.url
        self.session = session or requests.Session()
        self.timeout = timeout

    def current_position(self) -> Position:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("IP geolocation failed: %s", exc)
            raise GeolocationDenied("position unavailable") from exc
        try:
            return float(data["latitude"]), float(data["longitude"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("IP geolocation returned no position: %s", data)
            raise GeolocationDenied("position unavailable") from exc


def resolve_position(geolocator: Geolocator, timeout: float = DEFAULT_TIMEOUT) -> Position:
    """Ask ``geolocator`` for a position.

    Expiry, a malformed position and any other geolocator failure are all
    reported as :class:`GeolocationDenied`.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="geolocation")
    try:
        future = executor.submit(geolocator.current_position)
        try:
            latitude, longitude = future.result(timeout=timeout)
            return float(latitude), float(longitude)
        except FutureTimeout as exc:
            logger.warning("Geolocation timed out after %.1fs", timeout)
            raise GeolocationDenied("timed out") from exc
        except GeolocationDenied:
            raise
        except Exception as exc:
            logger.warning("Geolocator %s failed: %r", type(geolocator).__name__, exc)
            raise GeolocationDenied("position unavailable") from exc
    finally:
        executor.shutdown(wait=False)


__all__ = [
    "DEFAULT_TIMEOUT",
    "GeolocationDenied",
    "Geolocator",
    "IPGeolocator",
    "Position",
    "StaticGeolocator",
    "resolve_position",
]
