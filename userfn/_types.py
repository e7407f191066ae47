"""Core type definitions: parameter/return kinds and classified slots."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ParamKind(enum.Flag):
    """Kinds of parameters a user function may take.

    Each member is a single bit so kinds can be OR-ed into a mask for
    :meth:`UserFn.filter_params`.  ``ILLEGAL`` never appears in a
    classified descriptor.
    """

    ILLEGAL = 0
    CONTEXT = 0x01
    EVENT_TIME = 0x02
    VALUE = 0x04
    # A pull cursor such as ``Callable[[Ref[int]], bool]``.  With two
    # parameters a key/value input is implied.
    ITER = 0x08
    # A zero-argument factory returning an ITER-shaped callable.
    RE_ITER = 0x10
    # A push callback such as ``Callable[[int], None]`` or
    # ``Callable[[EventTime, str, T], None]``.  Emitters cannot fail.
    EMIT = 0x20
    # The element type itself, e.g. for coders.
    TYPE_TOKEN = 0x40

    def __str__(self) -> str:
        return _PARAM_LABELS.get(self, str(self.value))


class ReturnKind(enum.Flag):
    """Kinds of return values a user function may provide."""

    ILLEGAL = 0
    EVENT_TIME = 0x01
    VALUE = 0x02
    ERROR = 0x04

    def __str__(self) -> str:
        return _RETURN_LABELS.get(self, str(self.value))


_PARAM_LABELS: dict[ParamKind, str] = {
    ParamKind.CONTEXT: "Context",
    ParamKind.EVENT_TIME: "EventTime",
    ParamKind.VALUE: "Value",
    ParamKind.ITER: "Iter",
    ParamKind.RE_ITER: "ReIter",
    ParamKind.EMIT: "Emit",
    ParamKind.TYPE_TOKEN: "TypeToken",
}

_RETURN_LABELS: dict[ReturnKind, str] = {
    ReturnKind.EVENT_TIME: "EventTime",
    ReturnKind.VALUE: "Value",
    ReturnKind.ERROR: "Error",
}


@dataclass(frozen=True, slots=True)
class Param:
    """Kind and declared type of a single user function parameter."""

    kind: ParamKind
    type: Any
    name: str = ""


@dataclass(frozen=True, slots=True)
class ReturnParam:
    """Kind and declared type of a single user function return value."""

    kind: ReturnKind
    type: Any
