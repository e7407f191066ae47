"""Canonical pipeline types: event timestamps, write-through references and
universal type variables."""

from __future__ import annotations

import inspect
import time
from datetime import datetime, timedelta, timezone
from types import GenericAlias
from typing import Generic, TypeVar

# Universal types.  A parameter annotated with any of these (or any other
# TypeVar) accepts every element type and is bound at graph construction.
T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
W = TypeVar("W")
X = TypeVar("X")
Y = TypeVar("Y")
Z = TypeVar("Z")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


class EventTime(int):
    """Event timestamp of an element, in milliseconds since the Unix epoch."""

    __slots__ = ()

    def __new__(cls, millis: int = 0) -> EventTime:
        if not MIN_TIMESTAMP <= millis <= MAX_TIMESTAMP:
            raise ValueError(f"EventTime out of range: {millis}")
        return super().__new__(cls, millis)

    @classmethod
    def from_datetime(cls, dt: datetime) -> EventTime:
        """Convert *dt* to an EventTime.  Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls((dt - _EPOCH) // _MILLISECOND)

    @classmethod
    def now(cls) -> EventTime:
        return cls(time.time_ns() // 1_000_000)

    def to_datetime(self) -> datetime:
        """Return the timestamp as an aware UTC datetime."""
        return _EPOCH + timedelta(milliseconds=int(self))

    def __repr__(self) -> str:
        return f"EventTime({int(self)})"


MIN_TIMESTAMP = -(2**63) // 1000
MAX_TIMESTAMP = (2**63 - 1) // 1000


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


_UNSET = _Unset()


class Ref(Generic[T]):
    """A write-through cell, the pointer-like argument of an iterator.

    An iterator such as ``Callable[[Ref[str], Ref[int]], bool]`` stores the
    next key and value into the references it is handed and returns
    ``False`` once the input is exhausted.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: T | _Unset = _UNSET

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> T:
        """The stored value.  Raises ``LookupError`` if nothing was stored."""
        if isinstance(self._value, _Unset):
            raise LookupError("Ref has no value")
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Ref({self._value!r})"


def type_repr(t: object) -> str:
    """Readable rendering of an annotation for error messages and logs."""
    if t is inspect.Parameter.empty:
        return "no annotation"
    if t is None or t is type(None):
        return "None"
    if isinstance(t, type) and not isinstance(t, GenericAlias):
        if t.__module__ == "builtins":
            return t.__qualname__
        return f"{t.__module__}.{t.__qualname__}"
    return repr(t)
