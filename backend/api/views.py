"""REST API views for the weather dashboard."""
from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api.dashboard import build_dashboard
from core.entities import ViewStatus
from core.services.dashboard import DashboardController
from core.units import TemperatureUnit


class BadRequest(ValueError):
    """Raised for missing or malformed query parameters."""


def _unit_from(request) -> TemperatureUnit:
    raw = request.query_params.get("unit")
    if not raw:
        return TemperatureUnit.CELSIUS
    try:
        return TemperatureUnit.parse(raw)
    except ValueError as exc:
        raise BadRequest("unit must be celsius or fahrenheit") from exc


def _state_response(dashboard: DashboardController) -> Response:
    payload = dashboard.render()
    if dashboard.state.status is ViewStatus.ERROR:
        return Response(payload, status=status.HTTP_502_BAD_GATEWAY)
    return Response(payload, status=status.HTTP_200_OK)


def _bad_request(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class WeatherView(APIView):
    """Current conditions and 3-day forecast for a place or coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the rendered dashboard for ``q`` or ``lat``/``lon``."""
        try:
            dashboard = build_dashboard(_unit_from(request))
            params = request.query_params
            if "q" in params:
                dashboard.search(params["q"])
            elif "lat" in params and "lon" in params:
                try:
                    latitude = float(params["lat"])
                    longitude = float(params["lon"])
                except ValueError as exc:
                    raise BadRequest("lat and lon must be valid floating point numbers") from exc
                try:
                    dashboard.search_coordinates(latitude, longitude)
                except ValueError as exc:
                    raise BadRequest(str(exc)) from exc
            else:
                raise BadRequest("q or lat and lon query parameters are required")
        except BadRequest as exc:
            return _bad_request(exc)
        return _state_response(dashboard)


class LocateView(APIView):
    """Weather for the position reported by the configured geolocator."""

    def get(self, request, *args, **kwargs):
        try:
            dashboard = build_dashboard(_unit_from(request))
        except BadRequest as exc:
            return _bad_request(exc)
        dashboard.locate()
        return _state_response(dashboard)


class FavoritesView(APIView):
    def get(self, request, *args, **kwargs):
        dashboard = build_dashboard()
        return Response({"favorites": list(dashboard.favorites)}, status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):
        query = request.data.get("q") if isinstance(request.data, dict) else None
        if not query or not str(query).strip():
            return Response({"detail": "q is required"}, status=status.HTTP_400_BAD_REQUEST)

        dashboard = build_dashboard()
        dashboard.search(str(query))
        if dashboard.state.status is ViewStatus.ERROR:
            return _state_response(dashboard)

        added = dashboard.add_favorite()
        payload = {"added": added, "favorites": list(dashboard.favorites)}
        return Response(payload, status=status.HTTP_201_CREATED if added else status.HTTP_200_OK)


class FavoriteDetailView(APIView):
    def delete(self, request, name: str, *args, **kwargs):
        build_dashboard().remove_favorite(name)
        return Response(status=status.HTTP_204_NO_CONTENT)
