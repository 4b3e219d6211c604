from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

import requests

from ..entities import DisplayModel
from ..providers.base import BlockError, JsonClient, RequestConfig
from ..providers.geocoding import GeocodingProvider
from ..providers.openmeteo import OpenMeteoProvider
from ..region import Region, extract_city
from ..render import DEFAULT_ERROR_MESSAGE, render_error, render_loading, render_success


DEFAULT_CITY = "Varanasi"


@dataclass(frozen=True)
class Loading:
    name = "loading"


@dataclass(frozen=True)
class Error:
    message: str
    error: Optional[BaseException] = None

    name = "error"


@dataclass(frozen=True)
class Success:
    model: DisplayModel

    name = "success"


RenderState = Union[Loading, Error, Success]


@dataclass
class WeatherBlockConfig:
    geocoding_url: Optional[str] = None
    forecast_url: Optional[str] = None
    default_city: str = DEFAULT_CITY
    timeout: Optional[float] = None
    error_message: str = DEFAULT_ERROR_MESSAGE


class WeatherBlock:
    """Drive one region from its static content to a terminal render state.

    The flow is: read the city, show the skeleton, geocode, fetch current
    conditions, show the card. Any failure along the way ends in the same
    error message; the failure kind only reaches the logs.
    """

    def __init__(
        self,
        *,
        geocoder: Optional[GeocodingProvider] = None,
        weather: Optional[OpenMeteoProvider] = None,
        default_city: str = DEFAULT_CITY,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.geocoder = geocoder or GeocodingProvider()
        self.weather = weather or OpenMeteoProvider()
        self.default_city = default_city
        self.error_message = error_message
        self._log = logger or logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(
        cls,
        config: WeatherBlockConfig,
        session: Optional[requests.Session] = None,
    ) -> "WeatherBlock":
        client = JsonClient(session=session, request_config=RequestConfig(timeout=config.timeout))
        return cls(
            geocoder=GeocodingProvider(client=client, base_url=config.geocoding_url),
            weather=OpenMeteoProvider(client=client, base_url=config.forecast_url),
            default_city=config.default_city,
            error_message=config.error_message,
        )

    # Public API ---------------------------------------------------------
    def decorate(
        self,
        region: Region,
        on_transition: Optional[Callable[[RenderState], None]] = None,
    ) -> RenderState:
        """Render ``region`` through Loading into a terminal state.

        ``on_transition`` is called with each state as it is rendered. The
        region must accept writes: the error state is its last fallback.
        """
        city = self.default_city
        try:
            city = extract_city(region) or self.default_city
            render_loading(region)
            self._notify(on_transition, Loading())
            state = self.resolve(city)
            if isinstance(state, Success):
                render_success(region, state.model)
            else:
                render_error(region, state.message)
        except Exception as exc:  # noqa: BLE001 - a broken block must not break the page
            self._log.exception("Weather block failed unexpectedly for %r", city)
            state = Error(self.error_message, exc)
            render_error(region, self.error_message)
        self._notify(on_transition, state)
        return state

    def resolve(self, city: str) -> Union[Error, Success]:
        geo = self.geocoder.resolve(city)
        if not geo.ok:
            return self._failed("geocode", city, geo.error)
        point = geo.value

        weather = self.weather.current(point)
        if not weather.ok:
            return self._failed("weather", city, weather.error)
        observation = weather.value

        model = DisplayModel(
            city=point.resolved_name or city,
            temp_c=observation.temperature_c,
            condition=observation.condition,
        )
        self._log.debug("Weather block ready for %r: %s", city, model)
        return Success(model)

    # Helpers ------------------------------------------------------------
    def _notify(self, callback: Optional[Callable[[RenderState], None]], state: RenderState) -> None:
        if callback is None:
            return
        try:
            callback(state)
        except Exception:  # noqa: BLE001 - observers must not break the page
            self._log.exception("Weather block observer failed on %s", state.name)

    def _failed(self, stage: str, city: str, error: BlockError) -> Error:
        # Every kind collapses to the same user-facing message.
        self._log.error(
            "Weather block %s stage failed for %r (%s): %s",
            stage,
            city,
            error.kind,
            error,
            exc_info=error,
        )
        return Error(self.error_message, error)


def decorate(region: Region) -> RenderState:
    """Decorate a region with a default-configured :class:`WeatherBlock`."""
    return WeatherBlock().decorate(region)


__all__ = [
    "DEFAULT_CITY",
    "Loading",
    "Error",
    "Success",
    "RenderState",
    "WeatherBlockConfig",
    "WeatherBlock",
    "decorate",
]
