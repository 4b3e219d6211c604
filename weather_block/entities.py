from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """First geocoding match for a city query."""

    latitude: float
    longitude: float
    resolved_name: Optional[str] = None


@dataclass(frozen=True)
class WeatherObservation:
    """Point-in-time reading for a :class:`GeoPoint`.

    Upstream may omit either field; absent values stay ``None`` rather than
    being replaced with defaults.
    """

    temperature_c: Optional[float]
    weather_code: Optional[int]
    condition: str


@dataclass(frozen=True)
class DisplayModel:
    city: str
    temp_c: Optional[float]
    condition: str

    @property
    def display_temperature(self) -> Optional[int]:
        if self.temp_c is None:
            return None
        return round_half_up(self.temp_c)

    def as_dict(self) -> dict:
        return {
            "city": self.city,
            "temperature_c": self.display_temperature,
            "condition": self.condition,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = ["GeoPoint", "WeatherObservation", "DisplayModel", "round_half_up"]
