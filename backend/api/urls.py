"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import FavoriteDetailView, FavoritesView, LocateView, WeatherView

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("weather/locate", LocateView.as_view(), name="weather-locate"),
    path("favorites", FavoritesView.as_view(), name="favorites"),
    path("favorites/<path:name>", FavoriteDetailView.as_view(), name="favorite-detail"),
]
