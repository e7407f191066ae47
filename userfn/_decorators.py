"""User-facing decorator: @dofn."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from userfn._registry import _registry
from userfn._userfn import UserFn, classify

_USERFN_MARKER = "__userfn__"

F = TypeVar("F", bound=Callable[..., Any])


@overload
def dofn(fn: F) -> F: ...


@overload
def dofn(
    *,
    name: str | None = ...,
    strict: bool = ...,
) -> Callable[[F], F]: ...


def dofn(
    fn: Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    strict: bool = False,
) -> Any:
    """Classify a function at definition time and cache its descriptor.

    Can be used bare (``@dofn``) or with arguments
    (``@dofn(strict=True)``).  An invalid signature raises when the module
    defining the function is imported rather than when the pipeline runs.
    The function itself is returned unchanged, with its :class:`UserFn`
    stamped on as ``__userfn__``.

    Decorate plain functions only: inside a class body ``self`` is still
    unannotated.  For methods, classify the bound method with
    :func:`~userfn.describe` instead.
    """
    if fn is not None:
        return _make_dofn(fn, name=None, strict=False)

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        return _make_dofn(f, name=name, strict=strict)

    return decorator


def _make_dofn(
    fn: Callable[..., Any],
    *,
    name: str | None,
    strict: bool,
) -> Callable[..., Any]:
    u = classify(fn, name=name, strict=strict)
    _registry.register(u)
    setattr(fn, _USERFN_MARKER, u)
    return fn


def userfn_of(fn: Callable[..., Any]) -> UserFn | None:
    """Return the descriptor stamped by :func:`dofn`, or ``None``."""
    marker = getattr(fn, _USERFN_MARKER, None)
    return marker if isinstance(marker, UserFn) else None
