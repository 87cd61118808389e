"""Fetch error taxonomy.

Every failure of a location fetch is one of the five kinds below. They all
originate in the transport client and pass unchanged through the source and
the repository.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorCategory",
    "FetchError",
    "NoConnectionError",
    "BadURLError",
    "RequestFailedError",
    "StatusError",
    "DecodingFailedError",
]


class ErrorCategory(str, Enum):
    """Coarse grouping used when turning an error into a user message."""

    NO_CONNECTION = "no_connection"
    SERVER = "server"
    DATA = "data"


class FetchError(Exception):
    """Base exception for all location fetch errors."""

    category: ErrorCategory = ErrorCategory.SERVER


class NoConnectionError(FetchError):
    """Raised when the connectivity gate reports the network as unreachable."""

    category = ErrorCategory.NO_CONNECTION

    def __init__(self) -> None:
        super().__init__("No internet connection.")


class BadURLError(FetchError):
    """Raised when the request URL cannot be parsed into an http(s) URL."""

    category = ErrorCategory.DATA

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("The URL provided was invalid.")


class RequestFailedError(FetchError):
    """Raised when the request itself fails (timeout, DNS, refused connection)."""

    def __init__(self, underlying: Exception) -> None:
        self.underlying = underlying
        super().__init__(f"Network request failed: {underlying}")


class StatusError(FetchError):
    """Raised when the server answers with a status outside 200-299."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Unexpected HTTP status code: {code}")

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.code <= 599


class DecodingFailedError(FetchError):
    """Raised when the response body does not decode into the expected shape."""

    category = ErrorCategory.DATA

    def __init__(self, underlying: Exception) -> None:
        self.underlying = underlying
        super().__init__(f"Failed to decode response: {underlying}")
