"""The canonical context carrier handed to user functions."""

from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from typing import Any


class Context:
    """Carries an invocation ID and request-scoped values into a user function.

    A parameter annotated ``Context`` is classified as the context slot; the
    runner supplies one per bundle.  Values are never mutated in place:
    :meth:`with_value` returns a child that shares the ID and sees its
    parent's values.  Use :meth:`fork` to get an independent deep copy (for
    handing to another worker).
    """

    __slots__ = ("_parent", "_values", "invocation_id")

    def __init__(
        self,
        invocation_id: str | None = None,
        values: Mapping[str, Any] | None = None,
        *,
        _parent: Context | None = None,
    ) -> None:
        self.invocation_id: str = invocation_id or uuid.uuid4().hex
        self._values: dict[str, Any] = dict(values) if values is not None else {}
        self._parent = _parent

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return the value for *key*, searching parents, or *default*."""
        ctx: Context | None = self
        while ctx is not None:
            if key in ctx._values:
                return ctx._values[key]
            ctx = ctx._parent
        return default

    def with_value(self, key: str, value: Any) -> Context:
        """Return a child context in which *key* maps to *value*."""
        return Context(self.invocation_id, {key: value}, _parent=self)

    @property
    def values(self) -> dict[str, Any]:
        """Snapshot of every visible value, nearest definition winning."""
        chain: list[Context] = []
        ctx: Context | None = self
        while ctx is not None:
            chain.append(ctx)
            ctx = ctx._parent
        merged: dict[str, Any] = {}
        for c in reversed(chain):
            merged.update(c._values)
        return merged

    def fork(self) -> Context:
        """Create a detached context sharing the invocation ID.

        Values are flattened and deep-copied so mutations of mutable values
        in the fork do not affect the original (and vice-versa).
        """
        return Context(self.invocation_id, copy.deepcopy(self.values))

    def __repr__(self) -> str:
        return f"Context(invocation_id={self.invocation_id!r})"
