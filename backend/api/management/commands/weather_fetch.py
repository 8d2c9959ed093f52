"""Management command to look up weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.dashboard import build_dashboard
from core.entities import ViewStatus
from core.units import TemperatureUnit


class Command(BaseCommand):
    help = "Show current weather and the 3-day forecast for a place, coordinates or the current position"

    def add_arguments(self, parser) -> None:  # noqa: D401
        source = parser.add_mutually_exclusive_group()
        source.add_argument("--city", type=str, help="City name or postal code")
        source.add_argument("--favorite", type=str, help="Look up a saved favorite")
        source.add_argument("--locate", action="store_true", help="Use the configured geolocator")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument(
            "--unit",
            type=str,
            default=TemperatureUnit.CELSIUS.value,
            help="celsius or fahrenheit",
        )
        parser.add_argument("--add-favorite", action="store_true", help="Save the looked-up place")
        parser.add_argument("--remove-favorite", type=str, help="Remove a saved favorite")
        parser.add_argument("--list-favorites", action="store_true", help="Print saved favorites")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            unit = TemperatureUnit.parse(options["unit"])
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        dashboard = build_dashboard(unit)

        if options.get("remove_favorite"):
            dashboard.remove_favorite(options["remove_favorite"])
        if options.get("list_favorites"):
            self.stdout.write(json.dumps({"favorites": list(dashboard.favorites)}))
            return

        latitude = options.get("lat")
        longitude = options.get("lon")
        has_coordinates = latitude is not None or longitude is not None
        if options.get("city") is not None:
            dashboard.search(options["city"])
        elif options.get("favorite") is not None:
            dashboard.select_favorite(options["favorite"])
        elif options.get("locate"):
            dashboard.locate()
        elif has_coordinates:
            if latitude is None or longitude is None:
                raise CommandError("--lat and --lon must be given together")
            try:
                dashboard.search_coordinates(latitude, longitude)
            except ValueError as exc:
                raise CommandError(str(exc)) from exc
        elif options.get("remove_favorite"):
            self.stdout.write(json.dumps({"favorites": list(dashboard.favorites)}))
            return
        else:
            raise CommandError("One of --city, --favorite, --locate or --lat/--lon is required")

        if dashboard.state.status is ViewStatus.ERROR:
            raise CommandError(dashboard.state.error)

        if options.get("add_favorite"):
            dashboard.add_favorite()

        self.stdout.write(json.dumps(dashboard.render(), ensure_ascii=False))
