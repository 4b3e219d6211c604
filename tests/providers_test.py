from __future__ import annotations

import logging

import pytest
import requests

from weather_block.entities import GeoPoint
from weather_block.providers.base import (
    CityNotFound,
    JsonClient,
    ParseError,
    RequestConfig,
    RequestFailed,
    TransportError,
    safe_float,
    safe_int,
)
from weather_block.providers.geocoding import GeocodingProvider
from weather_block.providers.openmeteo import OpenMeteoProvider


GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"


def test_json_client_returns_parsed_body(requests_mock):
    requests_mock.get("https://json.test/data", json={"answer": 42})

    assert JsonClient().get_json("https://json.test/data") == {"answer": 42}
    assert requests_mock.last_request.headers["Accept"] == "application/json"


def test_json_client_keeps_accept_header_over_caller_headers(requests_mock):
    requests_mock.get("https://json.test/data", json={})

    JsonClient().get_json(
        "https://json.test/data",
        headers={"Accept": "text/html", "X-Trace": "abc"},
    )

    sent = requests_mock.last_request.headers
    assert sent["Accept"] == "application/json"
    assert sent["X-Trace"] == "abc"


def test_json_client_uses_configured_timeout(requests_mock):
    requests_mock.get("https://json.test/data", json={})

    JsonClient(request_config=RequestConfig(timeout=3.0)).get_json("https://json.test/data")

    assert requests_mock.last_request.timeout == 3.0


@pytest.mark.parametrize("status_code", [301, 404, 500, 503])
def test_json_client_rejects_non_success_status(requests_mock, status_code):
    requests_mock.get("https://json.test/data", status_code=status_code, text="nope")

    with pytest.raises(RequestFailed) as excinfo:
        JsonClient().get_json("https://json.test/data")

    assert excinfo.value.status_code == status_code
    assert excinfo.value.kind == "request_failed"


def test_json_client_wraps_transport_errors(requests_mock):
    requests_mock.get("https://json.test/data", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(TransportError) as excinfo:
        JsonClient().get_json("https://json.test/data")

    assert isinstance(excinfo.value.cause, requests.exceptions.ConnectTimeout)
    assert excinfo.value.kind == "transport"


def test_json_client_rejects_malformed_body(requests_mock):
    requests_mock.get("https://json.test/data", text="<html>not json</html>")

    with pytest.raises(ParseError):
        JsonClient().get_json("https://json.test/data")


def test_geocoding_returns_first_match(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(
        GEOCODING_URL,
        json={
            "results": [
                {"latitude": 40.71, "longitude": -74.0, "name": "New York"},
                {"latitude": 1.0, "longitude": 1.0, "name": "Elsewhere"},
            ]
        },
    )

    result = provider.resolve("New York")

    assert result.ok
    assert result.value == GeoPoint(latitude=40.71, longitude=-74.0, resolved_name="New York")
    url = requests_mock.last_request.url
    assert "name=New%20York" in url
    assert "count=1" in url


def test_geocoding_encodes_reserved_characters(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, json={"results": []})

    provider.resolve("Saint-Denis & Co/Paris")

    assert "name=Saint-Denis%20%26%20Co%2FParis" in requests_mock.last_request.url


@pytest.mark.parametrize("payload", [{"results": []}, {}, {"results": None}])
def test_geocoding_without_results_is_city_not_found(requests_mock, payload):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, json=payload)

    result = provider.resolve("Atlantis")

    assert not result.ok
    assert isinstance(result.error, CityNotFound)
    assert result.error.city == "Atlantis"
    assert result.kind == "city_not_found"


def test_geocoding_without_name_leaves_resolved_name_empty(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, json={"results": [{"latitude": 1.5, "longitude": 2.5}]})

    result = provider.resolve("Somewhere")

    assert result.value == GeoPoint(latitude=1.5, longitude=2.5, resolved_name=None)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"results": {"latitude": 1.0}},
        {"results": ["Paris"]},
        {"results": [{"name": "Paris"}]},
    ],
)
def test_geocoding_malformed_payload_is_parse_error(requests_mock, payload):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, json=payload)

    result = provider.resolve("Paris")

    assert result.kind == "parse"


def test_geocoding_returns_transport_failures_instead_of_raising(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, status_code=502, text="bad gateway")

    result = provider.resolve("Paris")

    assert isinstance(result.error, RequestFailed)
    assert result.error.status_code == 502


def test_openmeteo_current_observation(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(
        FORECAST_URL,
        json={"current": {"time": "2024-05-01T12:00", "temperature_2m": 21.6, "weather_code": 2}},
    )

    result = provider.current(GeoPoint(latitude=1.0, longitude=2.0, resolved_name="Testville"))

    assert result.ok
    observation = result.value
    assert observation.temperature_c == 21.6
    assert observation.weather_code == 2
    assert observation.condition == "Partly cloudy"

    request = requests_mock.last_request
    assert request.qs["latitude"] == ["1.0"]
    assert request.qs["longitude"] == ["2.0"]
    assert request.qs["current"] == ["temperature_2m,weather_code"]
    assert request.headers["Cache-Control"] == "no-store"
    assert request.headers["Accept"] == "application/json"


def test_openmeteo_tolerates_missing_fields(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(FORECAST_URL, json={"current": {}})

    observation = provider.current(GeoPoint(latitude=1.0, longitude=2.0)).value

    assert observation.temperature_c is None
    assert observation.weather_code is None
    assert observation.condition == "Other"


def test_openmeteo_without_current_block(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(FORECAST_URL, json={"latitude": 1.0})

    observation = provider.current(GeoPoint(latitude=1.0, longitude=2.0)).value

    assert observation.temperature_c is None
    assert observation.condition == "Other"


def test_openmeteo_failure_is_returned(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(FORECAST_URL, status_code=500, text="server error")

    result = provider.current(GeoPoint(latitude=1.0, longitude=2.0))

    assert not result.ok
    assert result.kind == "request_failed"


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), ("12.5", 12.5), (3, 3.0), ("abc", None), (True, None), (float("nan"), None)],
)
def test_safe_float(value, expected):
    assert safe_float(value) == expected


@pytest.mark.parametrize("value, expected", [(2, 2), (2.0, 2), ("3", 3), (2.5, None), (None, None)])
def test_safe_int(value, expected):
    assert safe_int(value) == expected


HUGE_NUMBER = "1" + "0" * 400


def test_geocoding_oversized_coordinates_are_parse_error(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(
        GEOCODING_URL,
        text='{"results": [{"latitude": %s, "longitude": 2.0, "name": "Paris"}]}' % HUGE_NUMBER,
    )

    result = provider.resolve("Paris")

    assert result.kind == "parse"


def test_openmeteo_oversized_readings_are_tolerated(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(
        FORECAST_URL,
        text='{"current": {"temperature_2m": %s, "weather_code": %s}}' % (HUGE_NUMBER, HUGE_NUMBER),
    )

    result = provider.current(GeoPoint(latitude=1.0, longitude=2.0))

    assert result.ok
    assert result.value.temperature_c is None
    assert result.value.condition == "Other"


def test_safe_numbers_reject_overflow():
    assert safe_float(int(HUGE_NUMBER)) is None
    assert safe_int(int(HUGE_NUMBER)) is None


def test_geocoding_returns_transport_error(requests_mock):
    provider = GeocodingProvider(base_url=GEOCODING_URL)
    requests_mock.get(GEOCODING_URL, exc=requests.exceptions.ConnectionError)

    result = provider.resolve("Paris")

    assert isinstance(result.error, TransportError)
    assert result.kind == "transport"


def test_openmeteo_returns_transport_error(requests_mock):
    provider = OpenMeteoProvider(base_url=FORECAST_URL)
    requests_mock.get(FORECAST_URL, exc=requests.exceptions.ReadTimeout)

    result = provider.current(GeoPoint(latitude=1.0, longitude=2.0))

    assert isinstance(result.error, TransportError)
    assert isinstance(result.error.cause, requests.exceptions.ReadTimeout)


def test_client_failures_are_logged_as_warnings(requests_mock, caplog):
    requests_mock.get("https://json.test/data", status_code=500)

    with caplog.at_level(logging.DEBUG):
        with pytest.raises(RequestFailed):
            JsonClient().get_json("https://json.test/data")

    client_records = [r for r in caplog.records if r.name == "JsonClient"]
    assert client_records
    assert all(r.levelno == logging.WARNING for r in client_records)
    assert all(r.exc_info is None for r in client_records)
