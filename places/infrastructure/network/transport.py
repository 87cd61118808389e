"""
HTTP transport: one request/response cycle mapped onto the fetch error taxonomy.

No caching and no retries here; fallback policy belongs to the repository.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Protocol, TypeVar
from urllib.parse import urlparse

import requests

from places.domains.errors import (
    BadURLError,
    DecodingFailedError,
    NoConnectionError,
    RequestFailedError,
    StatusError,
)
from places.infrastructure.network.connectivity import ConnectivityGate
from places.utils.config import request_timeout
from places.utils.logger import get_logger

logger = get_logger()

T = TypeVar("T")


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class TransportClient(Protocol):
    def fetch(
        self,
        url: str,
        method: HTTPMethod = HTTPMethod.GET,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        decode: Callable[[Any], T] | None = None,
    ) -> T:
        ...


def _prepare(
    url: str,
    method: HTTPMethod,
    headers: dict[str, str] | None,
    body: bytes | None,
) -> requests.PreparedRequest:
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise BadURLError(url) from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise BadURLError(url)
    try:
        verb = HTTPMethod(method).value
    except ValueError as e:
        raise RequestFailedError(e) from e
    try:
        return requests.Request(
            method=verb,
            url=url,
            headers=headers or {},
            data=body,
        ).prepare()
    except (requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL) as e:
        raise BadURLError(url) from e
    except requests.RequestException as e:
        # Rejected header values and the like: the request cannot be issued.
        raise RequestFailedError(e) from e


class HTTPTransport:
    """
    `requests`-based TransportClient.

    Each call opens its own Session, so concurrent calls share no request state.
    The connectivity gate is consulted before anything else.
    """

    def __init__(self, connectivity: ConnectivityGate, timeout: float | None = None) -> None:
        self._connectivity = connectivity
        self._timeout = timeout if timeout is not None else request_timeout()

    def fetch(
        self,
        url: str,
        method: HTTPMethod = HTTPMethod.GET,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        decode: Callable[[Any], T] | None = None,
    ) -> T:
        """
        Perform one request and decode its JSON body.

        Args:
            url: Absolute http(s) URL.
            method: HTTP method. Default GET.
            headers: Optional request headers.
            body: Optional raw request body.
            decode: Turns the parsed JSON into the result type. None returns the JSON as is.

        Returns:
            The decoded payload.

        Raises:
            NoConnectionError: The connectivity gate reports offline.
            BadURLError: url is not a usable http(s) URL.
            RequestFailedError: The request could not be built or produced no response.
            StatusError: The response status is outside 200-299.
            DecodingFailedError: The body is not JSON or decode rejected it.
        """
        if not self._connectivity.check_connection():
            logger.info("Skipping request to %s: no connection", url)
            raise NoConnectionError()

        prepared = _prepare(url, method, headers, body)

        logger.debug("HTTP %s %s", prepared.method, prepared.url)
        try:
            with requests.Session() as session:
                response = session.send(prepared, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("HTTP %s %s failed: %s", prepared.method, url, e)
            raise RequestFailedError(e) from e

        status = response.status_code
        if not 200 <= status <= 299:
            logger.warning("HTTP %s %s returned status %s", prepared.method, url, status)
            raise StatusError(status)

        try:
            data = response.json()
            return decode(data) if decode is not None else data
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            # requests' JSONDecodeError subclasses ValueError; RecursionError is too-deep nesting.
            logger.warning("Decoding response from %s failed: %s", url, e)
            raise DecodingFailedError(e) from e

