"""Lifecycle state for one outstanding call.

`RequestState` values are plain data meant to live in caller state (a view
model or a reducer). The library never transitions them;
callers set `Loading()` before issuing a call and `Success`/`Failure` once it
resolves:

    state = Loading()
    try:
        state = Success(await client.get(base, "/users", as_type=list[User]))
    except TinyAPIError as exc:
        state = Failure(str(exc))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Failure", "Idle", "Loading", "RequestState", "Success"]

T = TypeVar("T")


class RequestState(Generic[T]):
    __slots__ = ()

    @property
    def is_loading(self) -> bool:
        return False

    @property
    def data(self) -> T | None:
        """The success payload, or None for any other state."""
        return None

    @property
    def error(self) -> str | None:
        """The failure message, or None for any other state."""
        return None


@dataclass(frozen=True, slots=True)
class Idle(RequestState[T]):
    pass


@dataclass(frozen=True, slots=True)
class Loading(RequestState[T]):
    @property
    def is_loading(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Success(RequestState[T]):
    value: T

    @property
    def data(self) -> T | None:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure(RequestState[T]):
    message: str

    @property
    def error(self) -> str | None:
        return self.message
