from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)


class WeatherClientError(RuntimeError):
    """Base error for a failed weather lookup."""


class NetworkError(WeatherClientError):
    """Raised when the provider could not be reached."""


class NotFound(WeatherClientError):
    """Raised when the provider cannot resolve the requested location."""


class ProviderError(WeatherClientError):
    """Raised for invalid keys, unexpected statuses and malformed payloads."""


class QuotaExceeded(ProviderError):
    """Raised when a provider reports a quota/usage limit issue."""


@dataclass
class RequestConfig:
    timeout: float = 10.0


class WeatherProvider:
    """Base class for single-shot HTTP providers with failure classification."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code == 404:
            self._log.info("Location not found: %s", response.text)
            raise NotFound("location not found")
        if response.status_code in (401, 403):
            self._log.error("Provider rejected credentials: %s", response.status_code)
            raise ProviderError("invalid API key")
        if response.status_code == 429:
            self._log.warning("Quota exceeded: %s", response.text)
            raise QuotaExceeded("quota exceeded")
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise ProviderError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise NetworkError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkError("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ProviderError("invalid json") from exc


__all__ = [
    "NetworkError",
    "NotFound",
    "ProviderError",
    "QuotaExceeded",
    "RequestConfig",
    "WeatherClientError",
    "WeatherProvider",
]
