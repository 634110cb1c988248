"""JSON encoding and typed decoding built on pydantic.

Decoding goes through `pydantic.TypeAdapter`, so the declared type can be a
`BaseModel`, a dataclass, a `TypedDict`, a builtin container such as
`list[int]`, or `typing.Any` for plain parsed JSON.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from tinyapi.errors import DecodingError

__all__ = ["decode_json", "encode_json"]

T = TypeVar("T")


@lru_cache(maxsize=256)
def _cached_adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def _adapter(tp: Any) -> TypeAdapter[Any]:
    try:
        hash(tp)
    except TypeError:
        # Unhashable type forms (e.g. some Annotated metadata) skip the cache.
        return TypeAdapter(tp)
    return _cached_adapter(tp)


def decode_json(data: bytes, as_type: type[T]) -> T:
    """Validate `data` as JSON against `as_type`.

    Raises:
        DecodingError: When the payload is not valid JSON, does not match
            the declared type, or the type has no pydantic schema. The
            underlying message is preserved.
    """
    try:
        return _adapter(as_type).validate_json(data)
    except (ValidationError, PydanticUserError) as exc:
        raise DecodingError(str(exc)) from exc


def encode_json(value: Any) -> bytes:
    """Serialize `value` to JSON bytes.

    `bytes` are passed through unchanged so callers can supply a pre-encoded
    body.

    Raises:
        pydantic.PydanticSerializationError: When `value` cannot be serialized.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return _adapter(Any).dump_json(value)
