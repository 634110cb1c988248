from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest
from pydantic import BaseModel

from tinyapi.endpoint import Endpoint, HTTPMethod, SimpleEndpoint, normalize_query


class NewUser(BaseModel):
    name: str
    email: str


def test_simple_endpoint_defaults() -> None:
    endpoint = SimpleEndpoint(base_url="https://api.example.com", path="/users")
    assert endpoint.method is HTTPMethod.GET
    assert endpoint.headers is None
    assert endpoint.query_items is None
    assert endpoint.body is None
    assert isinstance(endpoint, Endpoint)


def test_simple_endpoint_is_immutable() -> None:
    endpoint = SimpleEndpoint(base_url="https://api.example.com", path="/users")
    with pytest.raises(FrozenInstanceError):
        endpoint.path = "/other"  # type: ignore[misc]


def test_simple_endpoint_accepts_method_strings() -> None:
    endpoint = SimpleEndpoint(base_url="https://api.example.com", path="/users", method="patch")
    assert endpoint.method is HTTPMethod.PATCH

    with pytest.raises(ValueError):
        SimpleEndpoint(base_url="https://api.example.com", path="/users", method="TRACE")


def test_query_mapping_is_normalized_to_ordered_string_pairs() -> None:
    endpoint = SimpleEndpoint(
        base_url="https://api.example.com",
        path="/search",
        query_items={"q": "tiny api", "page": 2, "skip": None},  # type: ignore[arg-type]
    )
    assert endpoint.query_items == (("q", "tiny api"), ("page", "2"))


def test_normalize_query_keeps_duplicate_keys_in_order() -> None:
    assert normalize_query([("tag", "a"), ("tag", "b")]) == (("tag", "a"), ("tag", "b"))
    assert normalize_query({}) is None
    assert normalize_query(None) is None


def test_json_constructor_serializes_models_and_dicts() -> None:
    endpoint = SimpleEndpoint.json(
        "https://api.example.com",
        "/users",
        NewUser(name="Ada", email="ada@example.com"),
    )
    assert endpoint.method is HTTPMethod.POST
    assert json.loads(endpoint.body or b"") == {"name": "Ada", "email": "ada@example.com"}

    put = SimpleEndpoint.json("https://api.example.com", "/users/1", {"name": "Ada"}, method=HTTPMethod.PUT)
    assert put.method is HTTPMethod.PUT
    assert json.loads(put.body or b"") == {"name": "Ada"}


def test_endpoints_with_headers_are_hashable() -> None:
    first = SimpleEndpoint(
        base_url="https://api.example.com",
        path="/users",
        headers={"X-Trace": "1", "Accept": "text/plain"},
    )
    second = SimpleEndpoint(
        base_url="https://api.example.com",
        path="/users",
        headers={"Accept": "text/plain", "X-Trace": "1"},
    )
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert {first: "cached"}[second] == "cached"
