"""Declarative endpoint descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from tinyapi.codec import encode_json

__all__ = [
    "Endpoint",
    "HTTPMethod",
    "QueryItems",
    "QueryInput",
    "SimpleEndpoint",
    "normalize_headers",
    "normalize_query",
]

QueryItems = tuple[tuple[str, str], ...]
QueryInput = Mapping[str, Any] | Iterable[tuple[str, Any]] | None


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@runtime_checkable
class Endpoint(Protocol):
    """Describes one HTTP call.

    Any object exposing these attributes can be passed to a client, so
    applications are free to model their API as enums, dataclasses or plain
    classes with computed properties.
    """

    @property
    def base_url(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> HTTPMethod: ...

    @property
    def headers(self) -> Mapping[str, str] | None: ...

    @property
    def query_items(self) -> QueryItems | None: ...

    @property
    def body(self) -> bytes | None: ...


def normalize_query(params: QueryInput) -> QueryItems | None:
    """Convert a params mapping or pair sequence into ordered string pairs.

    `None` values are dropped. Returns `None` when nothing remains.
    """
    if not params:
        return None
    pairs = params.items() if isinstance(params, Mapping) else params
    items: list[tuple[str, str]] = []
    for key, value in pairs:
        if value is None:
            continue
        items.append((str(key), str(value)))
    return tuple(items) or None


def normalize_headers(headers: Mapping[str, Any] | None) -> Mapping[str, str] | None:
    if not headers:
        return None
    return {str(key): str(value) for key, value in headers.items()}


def _coerce_method(value: HTTPMethod | str) -> HTTPMethod:
    if isinstance(value, HTTPMethod):
        return value
    return HTTPMethod(str(value).strip().upper())


@dataclass(frozen=True, slots=True)
class SimpleEndpoint:
    """Immutable, ready-made `Endpoint` implementation."""

    base_url: str
    path: str
    method: HTTPMethod = HTTPMethod.GET
    headers: Mapping[str, str] | None = None
    query_items: QueryItems | None = None
    body: bytes | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", _coerce_method(self.method))
        object.__setattr__(self, "headers", normalize_headers(self.headers))
        object.__setattr__(self, "query_items", normalize_query(self.query_items))
        if self.body is not None and not isinstance(self.body, bytes):
            object.__setattr__(self, "body", bytes(self.body))

    def __hash__(self) -> int:
        # `headers` is a dict; hash its items so equal endpoints hash equal.
        headers = tuple(sorted(self.headers.items())) if self.headers else None
        return hash((self.base_url, self.path, self.method, headers, self.query_items, self.body))

    @classmethod
    def json(
        cls,
        base_url: str,
        path: str,
        payload: Any,
        *,
        method: HTTPMethod | str = HTTPMethod.POST,
        headers: Mapping[str, str] | None = None,
        query_items: QueryInput = None,
    ) -> "SimpleEndpoint":
        """Build an endpoint whose body is `payload` serialized as JSON."""
        return cls(
            base_url=base_url,
            path=path,
            method=_coerce_method(method),
            headers=headers,
            query_items=normalize_query(query_items),
            body=encode_json(payload),
        )
