from __future__ import annotations

from typing import Optional

import pytest

from requests_mock import Mocker

from weather_block.region import Region


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def make_region():
    def _make(city: Optional[str] = None) -> Region:
        paragraphs = "<p>Weather</p>"
        if city is not None:
            paragraphs += f"<p>{city}</p>"
        return Region.from_html(f'<div class="weather"><div><div>{paragraphs}</div></div></div>')

    return _make
