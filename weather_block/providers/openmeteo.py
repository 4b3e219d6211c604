from __future__ import annotations

import logging
from typing import Any, Optional

from .base import BlockError, JsonClient, ParseError, safe_float, safe_int
from ..conditions import describe_weather_code
from ..entities import GeoPoint, WeatherObservation
from ..results import Result


NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


class OpenMeteoProvider:
    base_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, client: Optional[JsonClient] = None, base_url: Optional[str] = None) -> None:
        self.client = client or JsonClient()
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def current(self, point: GeoPoint) -> Result[WeatherObservation]:
        params = {
            "latitude": point.latitude,
            "longitude": point.longitude,
            "current": "temperature_2m,weather_code",
        }
        try:
            data = self.client.get_json(self.base_url, params=params, headers=NO_STORE_HEADERS)
            observation = self._observation(data)
        except BlockError as exc:
            return Result.failure(exc)
        self._log.debug(
            "Current weather at %s,%s: %s / code %s",
            point.latitude,
            point.longitude,
            observation.temperature_c,
            observation.weather_code,
        )
        return Result.success(observation)

    # helpers ------------------------------------------------------------
    def _observation(self, data: Any) -> WeatherObservation:
        if not isinstance(data, dict):
            raise ParseError("forecast payload is not an object")
        current = data.get("current")
        if not isinstance(current, dict):
            current = {}
        code = safe_int(current.get("weather_code"))
        return WeatherObservation(
            temperature_c=safe_float(current.get("temperature_2m")),
            weather_code=code,
            condition=describe_weather_code(code),
        )


__all__ = ["OpenMeteoProvider", "NO_STORE_HEADERS"]
