"""Minimal async HTTP client with a filesystem-backed mock."""

from __future__ import annotations

from tinyapi.client import APIClient, BaseAPIClient, TinyAPIClient
from tinyapi.config import Settings, get_settings
from tinyapi.endpoint import Endpoint, HTTPMethod, SimpleEndpoint
from tinyapi.errors import (
    DecodingError,
    HTTPStatusError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    TinyAPIError,
    coerce_error,
)
from tinyapi.mock import MockTinyAPIClient, mock_file_name
from tinyapi.request import DEFAULT_HEADERS, build_request
from tinyapi.state import Failure, Idle, Loading, RequestState, Success

__all__ = [
    "APIClient",
    "BaseAPIClient",
    "DEFAULT_HEADERS",
    "DecodingError",
    "Endpoint",
    "Failure",
    "HTTPMethod",
    "HTTPStatusError",
    "Idle",
    "InvalidURLError",
    "Loading",
    "MockTinyAPIClient",
    "NetworkError",
    "NoDataError",
    "RequestState",
    "Settings",
    "SimpleEndpoint",
    "Success",
    "TinyAPIClient",
    "TinyAPIError",
    "build_request",
    "coerce_error",
    "get_settings",
    "mock_file_name",
]
