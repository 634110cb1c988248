"""Async JSON client over httpx.

`TinyAPIClient` performs exactly one network exchange per call and maps every
failure into the closed `tinyapi.errors` taxonomy. `BaseAPIClient` carries the
typed convenience calls (`get`, `post`, ...) shared with the mock client.
"""

from __future__ import annotations

import abc
from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

import httpx
from loguru import logger

from tinyapi.codec import decode_json, encode_json
from tinyapi.config import Settings, get_settings
from tinyapi.endpoint import Endpoint, HTTPMethod, QueryInput, SimpleEndpoint
from tinyapi.errors import HTTPStatusError, NoDataError, coerce_error
from tinyapi.request import build_request

__all__ = ["APIClient", "BaseAPIClient", "TinyAPIClient"]

log = logger.bind(module="client")

T = TypeVar("T")


@runtime_checkable
class APIClient(Protocol):
    """Minimal contract shared by the live and mock clients."""

    async def request(self, endpoint: Endpoint, as_type: type[T]) -> T: ...

    async def request_data(self, endpoint: Endpoint) -> bytes: ...


class BaseAPIClient(abc.ABC):
    """Typed convenience calls layered on `request`."""

    @abc.abstractmethod
    async def request(self, endpoint: Endpoint, as_type: type[T]) -> T:
        """Perform one call and decode the body into `as_type`."""

    @abc.abstractmethod
    async def request_data(self, endpoint: Endpoint) -> bytes:
        """Perform one call and return the raw body."""

    async def request_raw(self, endpoint: Endpoint) -> bytes:
        return await self.request_data(endpoint)

    async def get(
        self,
        base_url: str,
        path: str,
        *,
        query: QueryInput = None,
        headers: Mapping[str, str] | None = None,
        as_type: type[T],
    ) -> T:
        endpoint = SimpleEndpoint(
            base_url=base_url,
            path=path,
            method=HTTPMethod.GET,
            headers=headers,
            query_items=query,  # type: ignore[arg-type]
        )
        return await self.request(endpoint, as_type)

    async def post(
        self,
        base_url: str,
        path: str,
        body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        as_type: type[T],
    ) -> T:
        return await self._send_with_body(HTTPMethod.POST, base_url, path, body, headers, as_type)

    async def put(
        self,
        base_url: str,
        path: str,
        body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        as_type: type[T],
    ) -> T:
        return await self._send_with_body(HTTPMethod.PUT, base_url, path, body, headers, as_type)

    async def patch(
        self,
        base_url: str,
        path: str,
        body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        as_type: type[T],
    ) -> T:
        return await self._send_with_body(HTTPMethod.PATCH, base_url, path, body, headers, as_type)

    async def delete(
        self,
        base_url: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        as_type: type[T],
    ) -> T:
        endpoint = SimpleEndpoint(
            base_url=base_url,
            path=path,
            method=HTTPMethod.DELETE,
            headers=headers,
        )
        return await self.request(endpoint, as_type)

    async def _send_with_body(
        self,
        method: HTTPMethod,
        base_url: str,
        path: str,
        body: Any,
        headers: Mapping[str, str] | None,
        as_type: type[T],
    ) -> T:
        try:
            content = encode_json(body)
        except Exception as exc:
            raise coerce_error(exc) from exc
        endpoint = SimpleEndpoint(
            base_url=base_url,
            path=path,
            method=method,
            headers=headers,
            body=content,
        )
        return await self.request(endpoint, as_type)


class TinyAPIClient(BaseAPIClient):
    """Live client backed by a short-lived `httpx.AsyncClient` per call.

    Notes:
        - No connections are pooled and no state is shared across calls, so a
          single instance can serve concurrent calls.
        - `timeout_seconds=None` keeps the httpx default timeout.
        - `transport` lets tests plug in `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        follow_redirects: bool = True,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = float(timeout_seconds) if timeout_seconds is not None else None
        self.follow_redirects = bool(follow_redirects)
        self.headers: dict[str, str] = dict(headers or {})
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "TinyAPIClient":
        """Build a client from application settings."""
        headers: dict[str, str] = {}
        if settings.http_user_agent:
            headers["User-Agent"] = settings.http_user_agent
        kwargs: dict[str, Any] = {
            "timeout_seconds": settings.http_timeout_seconds,
            "follow_redirects": settings.http_follow_redirects,
            "headers": headers,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def live(cls) -> "TinyAPIClient":
        """Return a client configured from the cached process settings."""
        return cls.from_settings(get_settings())

    def _build_client(self) -> httpx.AsyncClient:
        kwargs: dict[str, object] = {"follow_redirects": self.follow_redirects}
        if self.timeout_seconds is not None:
            kwargs["timeout"] = self.timeout_seconds
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)  # type: ignore[arg-type]

    async def _fetch(self, endpoint: Endpoint) -> bytes:
        request = build_request(endpoint, headers=self.headers)
        log.debug("{} {}", request.method, request.url)
        try:
            async with self._build_client() as client:
                request.extensions["timeout"] = client.timeout.as_dict()
                response = await client.send(request)
        except Exception as exc:
            error = coerce_error(exc)
            log.warning("{} {} failed: {}", request.method, request.url, error)
            raise error from exc

        status = int(response.status_code)
        if not 200 <= status <= 299:
            log.warning("{} {} returned status {}", request.method, request.url, status)
            raise HTTPStatusError(status)
        return response.content

    async def request(self, endpoint: Endpoint, as_type: type[T]) -> T:
        """Perform one call and decode the body into `as_type`.

        Raises:
            InvalidURLError: The endpoint does not form a valid absolute URL.
            NetworkError: The exchange failed at the transport level.
            HTTPStatusError: The status is outside 200-299.
            NoDataError: The body is empty.
            DecodingError: The body does not match `as_type`.
        """
        data = await self._fetch(endpoint)
        if not data:
            raise NoDataError()
        return decode_json(data, as_type)

    async def request_data(self, endpoint: Endpoint) -> bytes:
        """Perform one call and return the body bytes, which may be empty."""
        return await self._fetch(endpoint)

