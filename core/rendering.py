from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional

from .entities import CurrentConditions, DashboardViewState, ForecastEntry
from .units import TemperatureUnit, forecast_labels, format_date, format_temperature


def render_state(
    state: DashboardViewState,
    unit: TemperatureUnit,
    favorites: Iterable[str] = (),
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Serialize a view state for display in ``unit``."""
    today = today or date.today()
    payload: Dict[str, Any] = {
        "status": state.status.value,
        "error": state.error,
        "unit": unit.value,
        "current": None,
        "forecast": [],
        "favorites": list(favorites),
    }
    if state.current is not None:
        payload["current"] = _render_current(state.current, unit, today)
    labels = forecast_labels(len(state.forecast), today)
    payload["forecast"] = [
        _render_entry(entry, unit, label) for entry, label in zip(state.forecast, labels)
    ]
    return payload


def _render_current(current: CurrentConditions, unit: TemperatureUnit, today: date) -> Dict[str, Any]:
    return {
        "name": current.name,
        "country": current.country,
        "date": format_date(today),
        "temperature": format_temperature(current.temperature_c, unit),
        "humidity": current.humidity,
        "wind_speed_ms": current.wind_speed_ms,
        "category": current.category.value,
        "description": current.description,
    }


def _render_entry(entry: ForecastEntry, unit: TemperatureUnit, label: str) -> Dict[str, Any]:
    return {
        "date": label,
        "temperature": format_temperature(entry.temperature_c, unit),
        "humidity": entry.humidity,
        "wind_speed_ms": entry.wind_speed_ms,
        "category": entry.category.value,
        "description": entry.description,
    }


__all__ = ["render_state"]
