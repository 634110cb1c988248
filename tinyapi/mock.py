"""Mock client that serves canned JSON resources instead of the network.

Each endpoint maps to one resource named after its method and path:

    GET  /users      -> mock_get_users.json
    GET  /users/1    -> mock_get_users_1.json
    POST ""          -> mock_post_root.json

Query items, headers and request bodies never affect the lookup.
"""

from __future__ import annotations

import asyncio
import os
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, Mapping, TypeVar

from loguru import logger

from tinyapi.client import BaseAPIClient
from tinyapi.codec import decode_json
from tinyapi.config import Settings, get_settings
from tinyapi.endpoint import Endpoint, HTTPMethod, SimpleEndpoint
from tinyapi.errors import InvalidURLError, NoDataError, coerce_error

__all__ = [
    "DEMO_DELAY_SECONDS",
    "MOCK_RESOURCE_SUFFIX",
    "MockTinyAPIClient",
    "PREVIEW_DELAY_SECONDS",
    "TESTING_DELAY_SECONDS",
    "mock_file_name",
]

log = logger.bind(module="mock")

T = TypeVar("T")
ResourceRoot = str | os.PathLike | Traversable

MOCK_RESOURCE_SUFFIX = ".json"
DEFAULT_DELAY_SECONDS = 0.5
PREVIEW_DELAY_SECONDS = 0.1
TESTING_DELAY_SECONDS = 0.0
DEMO_DELAY_SECONDS = 1.0


def mock_file_name(endpoint: Endpoint) -> str:
    """Return the resource name (without suffix) for `endpoint`."""
    method = str(getattr(endpoint.method, "value", endpoint.method)).lower()
    segments = [segment for segment in (endpoint.path or "").split("/") if segment]
    if not segments:
        return f"mock_{method}_root"
    return f"mock_{method}_{'_'.join(segments)}"


def _as_traversable(root: ResourceRoot) -> Traversable:
    if isinstance(root, (str, os.PathLike)):
        return Path(root).expanduser()
    return root


class MockTinyAPIClient(BaseAPIClient):
    """Serve `<name>.json` resources from a directory or package.

    Notes:
        - `delay` seconds are awaited before every lookup; `0` skips the sleep.
        - A missing resource raises `InvalidURLError`, like an unresolvable URL.
    """

    def __init__(self, *, delay: float = DEFAULT_DELAY_SECONDS, resource_dir: ResourceRoot | None = None) -> None:
        delay = float(delay)
        if delay < 0:
            raise ValueError("delay must be >= 0.")
        self.delay = delay
        if resource_dir is None:
            resource_dir = get_settings().mock_resource_dir
        self.resource_root = _as_traversable(resource_dir)

    @classmethod
    def from_package(cls, package: str, *, delay: float = DEFAULT_DELAY_SECONDS) -> "MockTinyAPIClient":
        """Serve resources bundled as package data of `package`."""
        return cls(delay=delay, resource_dir=resources.files(package))

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "MockTinyAPIClient":
        kwargs: dict[str, Any] = {
            "delay": settings.mock_delay_seconds,
            "resource_dir": settings.mock_resource_dir,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def preview(cls, resource_dir: ResourceRoot | None = None) -> "MockTinyAPIClient":
        """Short delay for interactive previews."""
        return cls(delay=PREVIEW_DELAY_SECONDS, resource_dir=resource_dir)

    @classmethod
    def testing(cls, resource_dir: ResourceRoot | None = None) -> "MockTinyAPIClient":
        """No delay, for deterministic tests."""
        return cls(delay=TESTING_DELAY_SECONDS, resource_dir=resource_dir)

    @classmethod
    def demo(cls, resource_dir: ResourceRoot | None = None) -> "MockTinyAPIClient":
        """Realistic latency for demos."""
        return cls(delay=DEMO_DELAY_SECONDS, resource_dir=resource_dir)

    def resource_for(self, endpoint: Endpoint) -> Traversable:
        """Return the resource backing `endpoint` without checking it exists."""
        return self.resource_root / f"{mock_file_name(endpoint)}{MOCK_RESOURCE_SUFFIX}"

    async def _load(self, endpoint: Endpoint) -> bytes:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        resource = self.resource_for(endpoint)
        if not resource.is_file():
            log.warning("No mock resource {} for path {!r}", resource.name, endpoint.path)
            raise InvalidURLError(f"missing mock resource {resource.name}")
        try:
            data = resource.read_bytes()
        except OSError as exc:
            raise coerce_error(exc) from exc
        log.debug("Serving {} ({} bytes)", resource.name, len(data))
        return data

    async def request(self, endpoint: Endpoint, as_type: type[T]) -> T:
        """Load the endpoint's resource and decode it into `as_type`."""
        data = await self._load(endpoint)
        if not data:
            raise NoDataError()
        return decode_json(data, as_type)

    async def request_data(self, endpoint: Endpoint) -> bytes:
        """Load the endpoint's resource and return its bytes."""
        return await self._load(endpoint)

    async def _send_with_body(
        self,
        method: HTTPMethod,
        base_url: str,
        path: str,
        body: Any,
        headers: Mapping[str, str] | None,
        as_type: type[T],
    ) -> T:
        # Only method and path select the resource; the body is never encoded.
        endpoint = SimpleEndpoint(
            base_url=base_url,
            path=path,
            method=method,
            headers=headers,
            body=None,
        )
        return await self.request(endpoint, as_type)
