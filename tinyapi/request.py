"""Translate endpoint descriptors into `httpx.Request` objects."""

from __future__ import annotations

from typing import Mapping

import httpx

from tinyapi.endpoint import Endpoint
from tinyapi.errors import InvalidURLError

__all__ = ["DEFAULT_HEADERS", "build_request", "build_url"]

DEFAULT_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def build_url(endpoint: Endpoint) -> httpx.URL:
    """Resolve the absolute URL for `endpoint`.

    The endpoint path replaces any path carried by the base URL, and the query
    is replaced by the endpoint's query items. Both are set as URL components
    so httpx handles percent-encoding.

    Raises:
        InvalidURLError: When the base URL cannot be parsed or the result is
            not an absolute http(s) URL.
    """
    raw_base = (endpoint.base_url or "").strip()
    if not raw_base:
        raise InvalidURLError("base URL is empty")
    try:
        base = httpx.URL(raw_base)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(f"cannot parse base URL {raw_base!r}: {exc}") from exc
    if not base.scheme or not base.host:
        raise InvalidURLError(f"base URL {raw_base!r} is not absolute")

    # A literal "?" or "#" belongs to the path, not to a query or fragment.
    path = (endpoint.path or "").replace("?", "%3F").replace("#", "%23")
    query = list(endpoint.query_items or ())
    try:
        return base.copy_with(path=path, params=query or None, fragment=None)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(f"cannot combine {raw_base!r} with path {endpoint.path!r}: {exc}") from exc


def build_request(endpoint: Endpoint, *, headers: Mapping[str, str] | None = None) -> httpx.Request:
    """Build the wire request for `endpoint`.

    Header precedence, lowest first: `DEFAULT_HEADERS`, `headers` (client-level),
    then `endpoint.headers`. Keys compare case-insensitively.
    """
    url = build_url(endpoint)

    merged = httpx.Headers(DEFAULT_HEADERS)
    for layer in (headers, endpoint.headers):
        for key, value in (layer or {}).items():
            merged[key] = value

    method = getattr(endpoint.method, "value", endpoint.method)
    return httpx.Request(str(method), url, headers=merged, content=endpoint.body)
