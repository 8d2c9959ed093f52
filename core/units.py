from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import List


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"

    def toggled(self) -> "TemperatureUnit":
        if self is TemperatureUnit.CELSIUS:
            return TemperatureUnit.FAHRENHEIT
        return TemperatureUnit.CELSIUS

    @classmethod
    def parse(cls, value: str) -> "TemperatureUnit":
        normalized = (value or "").strip().lower()
        aliases = {"c": cls.CELSIUS, "f": cls.FAHRENHEIT}
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"unknown temperature unit: {value!r}") from exc


def to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def convert(celsius: float, unit: TemperatureUnit) -> float:
    if unit is TemperatureUnit.FAHRENHEIT:
        return to_fahrenheit(celsius)
    return celsius


def format_temperature(celsius: float, unit: TemperatureUnit) -> str:
    """Render a stored Celsius value in ``unit``, e.g. ``"64.4 °F"``."""
    return f"{convert(celsius, unit):.1f} {unit.symbol}"


def format_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def forecast_labels(count: int, today: date) -> List[str]:
    """Labels for the first ``count`` forecast entries.

    Entry ``i`` is shown as ``today + (i + 1)`` days regardless of its own
    timestamp.
    """
    return [format_date(today + timedelta(days=index + 1)) for index in range(count)]


__all__ = [
    "TemperatureUnit",
    "convert",
    "forecast_labels",
    "format_date",
    "format_temperature",
    "to_celsius",
    "to_fahrenheit",
]
