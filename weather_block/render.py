from __future__ import annotations

from django.utils.html import format_html

from .entities import DisplayModel
from .region import Region


DEFAULT_ERROR_MESSAGE = "Unable to load weather right now."
UNKNOWN_TEMPERATURE = "--"

SKELETON_HTML = (
    '<div class="weather-skeleton" aria-hidden="true">'
    '<div class="bar"></div>'
    '<div class="bar short"></div>'
    "</div>"
)


def render_loading(region: Region) -> None:
    region.replace_content(SKELETON_HTML)


def render_error(region: Region, message: str = DEFAULT_ERROR_MESSAGE) -> None:
    region.replace_content(
        format_html('<div class="weather-error" role="alert">{}</div>', message)
    )


def render_success(region: Region, model: DisplayModel) -> None:
    temperature = model.display_temperature
    region.replace_content(
        format_html(
            '<article class="weather-card" aria-live="polite">'
            '<header class="weather-city">{}</header>'
            '<div class="weather-temp">{}°C</div>'
            '<div class="weather-cond">{}</div>'
            "</article>",
            model.city,
            UNKNOWN_TEMPERATURE if temperature is None else temperature,
            model.condition,
        )
    )


__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "UNKNOWN_TEMPERATURE",
    "render_loading",
    "render_error",
    "render_success",
]
