"""REST API views that decorate weather blocks."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from django.conf import settings
from django.utils.html import format_html
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weather_block.region import Region
from weather_block.services.block import RenderState, Success, WeatherBlock, WeatherBlockConfig


@lru_cache(maxsize=1)
def get_weather_block() -> WeatherBlock:
    options = settings.WEATHER_BLOCK
    config = WeatherBlockConfig(
        geocoding_url=options.get("GEOCODING_URL"),
        forecast_url=options.get("FORECAST_URL"),
        default_city=options.get("DEFAULT_CITY") or WeatherBlockConfig.default_city,
        timeout=options.get("TIMEOUT"),
    )
    return WeatherBlock.from_config(config)


def block_markup(city: str) -> str:
    """Authoring markup for a weather block naming ``city``."""
    return format_html(
        '<div class="weather"><div><div><p>Weather</p><p>{}</p></div></div></div>',
        city,
    )


def serialize_state(region: Region, state: RenderState) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"state": state.name, "html": str(region)}
    if isinstance(state, Success):
        payload["weather"] = state.model.as_dict()
    return payload


def decorate_markup(markup: str) -> Dict[str, Any]:
    region = Region.from_html(markup)
    state = get_weather_block().decorate(region)
    return serialize_state(region, state)


class WeatherBlockView(APIView):
    """Render a weather block to its final markup."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Decorate a block for the ``city`` query parameter."""
        city = request.query_params.get("city", "")
        return Response(decorate_markup(block_markup(city)), status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Decorate the block markup posted as ``{"html": ...}``."""
        data = request.data
        markup = data.get("html") if isinstance(data, dict) else None
        if not isinstance(markup, str) or not markup.strip():
            return Response({"detail": "html must be a non-empty string"}, status=status.HTTP_400_BAD_REQUEST)
        return Response(decorate_markup(markup), status=status.HTTP_200_OK)
