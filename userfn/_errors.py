"""Errors raised when a user function cannot be classified."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from userfn._typex import type_repr


class UserFnError(TypeError):
    """Base class for all classification failures.

    A failure means the callable is invalid as a pipeline function and must
    not be registered or invoked.
    """


class NotAFunction(UserFnError):
    """The supplied value is not a function or method."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"not a function or method: {type(value).__name__}")


class UnresolvableSignature(UserFnError):
    """The callable's signature or annotations could not be read."""

    def __init__(self, fn_name: str, reason: str) -> None:
        self.fn_name = fn_name
        self.reason = reason
        super().__init__(f"cannot read signature of {fn_name}: {reason}")


class UnsupportedParameterType(UserFnError):
    """A parameter's type matches none of the recognized kinds."""

    def __init__(self, fn_name: str, index: int, type: Any, name: str = "") -> None:
        self.fn_name = fn_name
        self.index = index
        self.type = type
        self.name = name
        label = f"{index} ({name!r})" if name else str(index)
        super().__init__(
            f"bad parameter type for {fn_name}: parameter {label} "
            f"has type {type_repr(type)}"
        )


class UnsupportedReturnType(UserFnError):
    """A return value's type matches none of the recognized kinds."""

    def __init__(self, fn_name: str, index: int, type: Any) -> None:
        self.fn_name = fn_name
        self.index = index
        self.type = type
        super().__init__(
            f"bad return type for {fn_name}: return {index} "
            f"has type {type_repr(type)}"
        )


class DuplicateKind(UserFnError):
    """A singleton kind (context, timestamp, type token, error) occurs twice."""

    def __init__(self, fn_name: str, kind: Any, indices: Sequence[int]) -> None:
        self.fn_name = fn_name
        self.kind = kind
        self.indices = tuple(indices)
        super().__init__(
            f"{fn_name} declares {kind} more than once, at positions "
            + ", ".join(str(i) for i in self.indices)
        )
