from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

from .base import BlockError, CityNotFound, JsonClient, ParseError, safe_float
from ..entities import GeoPoint
from ..results import Result


class GeocodingProvider:
    """Resolve a city name to coordinates with the Open-Meteo geocoding API."""

    base_url = "https://geocoding-api.open-meteo.com/v1/search"

    def __init__(self, client: Optional[JsonClient] = None, base_url: Optional[str] = None) -> None:
        self.client = client or JsonClient()
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def resolve(self, city: str) -> Result[GeoPoint]:
        # Encoded here so spaces travel as %20 rather than "+".
        query = f"name={quote(city, safe='')}&count=1"
        try:
            data = self.client.get_json(self.base_url, params=query)
            point = self._first_match(city, data)
        except BlockError as exc:
            return Result.failure(exc)
        self._log.debug("Resolved %r to %s,%s", city, point.latitude, point.longitude)
        return Result.success(point)

    def _first_match(self, city: str, data: Any) -> GeoPoint:
        if not isinstance(data, dict):
            raise ParseError("geocoding payload is not an object")
        results = data.get("results") or []
        if not isinstance(results, list):
            raise ParseError("geocoding results are not a list")
        if not results:
            self._log.info("No geocoding match for %r", city)
            raise CityNotFound(city)
        first = results[0]
        if not isinstance(first, dict):
            raise ParseError("geocoding result is not an object")
        latitude = safe_float(first.get("latitude"))
        longitude = safe_float(first.get("longitude"))
        if latitude is None or longitude is None:
            raise ParseError("geocoding result has no coordinates")
        name = first.get("name")
        return GeoPoint(
            latitude=latitude,
            longitude=longitude,
            resolved_name=name if isinstance(name, str) and name else None,
        )


__all__ = ["GeocodingProvider"]
