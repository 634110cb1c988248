"""Closed error taxonomy shared by the live and mock clients.

Every failure surfaced by a tinyapi client is one of the five concrete
subclasses of `TinyAPIError` defined here. Callers can either catch the base
class or dispatch on the concrete type / `kind`.
"""

from __future__ import annotations

__all__ = [
    "DecodingError",
    "HTTPStatusError",
    "InvalidURLError",
    "NetworkError",
    "NoDataError",
    "TinyAPIError",
    "coerce_error",
]


class TinyAPIError(RuntimeError):
    """Base class for all tinyapi client failures."""

    kind: str = "error"

    @property
    def description(self) -> str:
        """Human-readable description of the failure."""
        return str(self)


class InvalidURLError(TinyAPIError):
    """Raised when a fetch target cannot be resolved.

    Used both for endpoints whose base URL and path do not form a valid
    absolute URL and for mock resources that do not exist.
    """

    kind = "invalid_url"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Invalid URL")
        self.detail = detail


class NoDataError(TinyAPIError):
    """Raised when a successful response carries an empty body."""

    kind = "no_data"

    def __init__(self) -> None:
        super().__init__("No data received")


class DecodingError(TinyAPIError):
    """Raised when a response body does not match the declared type."""

    kind = "decoding"

    def __init__(self, message: str) -> None:
        self.message = str(message)
        super().__init__(f"Decoding failed: {self.message}")


class HTTPStatusError(TinyAPIError):
    """Raised when the response status is outside 200-299."""

    kind = "http_status"

    def __init__(self, status_code: int) -> None:
        self.status_code = int(status_code)
        super().__init__(f"HTTP Error: {self.status_code}")


class NetworkError(TinyAPIError):
    """Raised for transport faults and anything else outside the taxonomy."""

    kind = "network"

    def __init__(self, message: str) -> None:
        self.message = str(message)
        super().__init__(f"Network Error: {self.message}")


def coerce_error(exc: BaseException) -> TinyAPIError:
    """Return `exc` when it is already a `TinyAPIError`, else wrap it."""
    if isinstance(exc, TinyAPIError):
        return exc
    message = str(exc).strip() or type(exc).__name__
    return NetworkError(message)
