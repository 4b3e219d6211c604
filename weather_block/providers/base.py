from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import requests
from requests import Response


class BlockError(RuntimeError):
    """Base error for the weather block pipeline."""

    kind = "error"


class RequestFailed(BlockError):
    """Raised when the upstream answers with a non-success status."""

    kind = "request_failed"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class TransportError(BlockError):
    """Raised when the request never produced a response."""

    kind = "transport"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"transport failure: {cause}")
        self.cause = cause


class ParseError(BlockError):
    """Raised when a response body cannot be understood."""

    kind = "parse"


class CityNotFound(BlockError):
    """The geocoder answered but had no match for the query."""

    kind = "city_not_found"

    def __init__(self, city: str) -> None:
        super().__init__(f"city not found: {city!r}")
        self.city = city


@dataclass
class RequestConfig:
    # None leaves the timeout to the transport.
    timeout: Optional[float] = None


class JsonClient:
    """Performs single JSON GET requests with a uniform failure contract."""

    accept = "application/json"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def get_json(
        self,
        url: str,
        *,
        params: Union[str, Mapping[str, Any], None] = None,
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        merged_headers = dict(headers or {})
        merged_headers["Accept"] = self.accept
        kwargs.setdefault("timeout", self.request_config.timeout)
        try:
            response = self.session.request(
                "GET",
                url,
                params=params,
                headers=merged_headers,
                **kwargs,
            )
        except requests.RequestException as exc:
            self._log.warning("Request to %s failed: %s", url, exc)
            raise TransportError(exc) from exc
        return self._json(self._handle_response(response))

    def _handle_response(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.warning("Upstream returned %s for %s", response.status_code, response.url)
            raise RequestFailed(response.status_code)
        return response

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.warning("Failed to decode JSON from %s: %s", response.url, exc)
            raise ParseError("invalid json") from exc


def safe_float(value: Optional[object]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def safe_int(value: Optional[object]) -> Optional[int]:
    number = safe_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


__all__ = [
    "BlockError",
    "RequestFailed",
    "TransportError",
    "ParseError",
    "CityNotFound",
    "RequestConfig",
    "JsonClient",
    "safe_float",
    "safe_int",
]
