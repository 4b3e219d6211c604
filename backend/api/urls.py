"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import WeatherBlockView

urlpatterns = [
    path("blocks/weather", WeatherBlockView.as_view(), name="weather-block"),
]
