from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional


WEATHER_CODES: Mapping[int, str] = MappingProxyType(
    {
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
    }
)
DEFAULT_CONDITION = "Other"


def describe_weather_code(code: Optional[int]) -> str:
    """Translate an Open-Meteo weather code into a short label."""
    if code is None:
        return DEFAULT_CONDITION
    return WEATHER_CODES.get(code, DEFAULT_CONDITION)


__all__ = ["WEATHER_CODES", "DEFAULT_CONDITION", "describe_weather_code"]
