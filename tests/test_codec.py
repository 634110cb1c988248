from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from tinyapi.codec import decode_json, encode_json
from tinyapi.errors import DecodingError


class User(BaseModel):
    id: int
    name: str


@dataclass
class Point:
    x: int
    y: int


def test_decode_json_supports_models_containers_and_any() -> None:
    assert decode_json(b'{"id": 1, "name": "Ada"}', User) == User(id=1, name="Ada")
    assert decode_json(b"[1, 2, 3]", list[int]) == [1, 2, 3]
    assert decode_json(b'{"x": 1, "y": 2}', Point) == Point(x=1, y=2)
    assert decode_json(b'{"nested": [null, true]}', Any) == {"nested": [None, True]}


def test_decode_json_preserves_validator_message() -> None:
    with pytest.raises(DecodingError) as excinfo:
        decode_json(b'{"id": "not-a-number", "name": "Ada"}', User)

    cause = excinfo.value.__cause__
    assert cause is not None
    assert excinfo.value.message == str(cause)
    assert "id" in excinfo.value.message


def test_decode_json_rejects_malformed_json() -> None:
    with pytest.raises(DecodingError, match="Decoding failed"):
        decode_json(b"{", Any)


def test_encode_json_handles_models_and_passes_bytes_through() -> None:
    assert encode_json(User(id=1, name="Ada")) == b'{"id":1,"name":"Ada"}'
    assert encode_json({"points": [Point(x=1, y=2)]}) == b'{"points":[{"x":1,"y":2}]}'
    assert encode_json(b'{"raw":true}') == b'{"raw":true}'


def test_encode_json_raises_for_unserializable_values() -> None:
    with pytest.raises(PydanticSerializationError):
        encode_json({"value": object()})


class Opaque:
    def __init__(self, x: int) -> None:
        self.x = x


def test_decode_json_reports_unsupported_types_as_decoding_errors() -> None:
    with pytest.raises(DecodingError):
        decode_json(b'{"x": 1}', Opaque)
