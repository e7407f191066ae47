"""Runtime reflection over callables and callable-shaped annotations."""

from __future__ import annotations

import collections.abc
import functools
import inspect
from typing import Any, get_args, get_origin

from userfn._errors import UnresolvableSignature
from userfn._typex import Ref

_empty = inspect.Parameter.empty


def is_function(value: Any) -> bool:
    """True for functions, methods, partials and callable instances.

    Classes are callable but are rejected: their "signature" is the
    constructor's and their return value is the instance.
    """
    return callable(value) and not isinstance(value, type)


def fn_name(fn: Any) -> str:
    """Best-effort, debug-oriented name of where *fn* was defined."""
    if isinstance(fn, functools.partial):
        return f"functools.partial({fn_name(fn.func)})"
    qualname = getattr(fn, "__qualname__", None)
    if qualname is None:
        cls = type(fn)
        return f"{cls.__module__}.{cls.__qualname__}.__call__"
    module = getattr(fn, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


def fn_signature(fn: Any, name: str) -> tuple[list[tuple[str, Any]], list[Any]]:
    """Return ``([(param_name, type), ...], [return_type, ...])`` for *fn*.

    String annotations (including ``from __future__ import annotations``)
    are evaluated.  ``*args: X`` is reported as ``tuple[X, ...]`` and
    ``**kwargs: X`` as ``dict[str, X]``.  Unannotated parameters are reported
    as ``inspect.Parameter.empty``.
    """
    try:
        sig = inspect.signature(fn, eval_str=True)
    except (ValueError, TypeError) as exc:
        raise UnresolvableSignature(name, str(exc)) from exc
    except (NameError, AttributeError, SyntaxError) as exc:
        raise UnresolvableSignature(name, f"unresolvable annotation: {exc}") from exc

    params: list[tuple[str, Any]] = []
    for p in sig.parameters.values():
        t = p.annotation
        if t is not _empty:
            if p.kind is inspect.Parameter.VAR_POSITIONAL:
                t = tuple[t, ...]  # type: ignore[valid-type]
            elif p.kind is inspect.Parameter.VAR_KEYWORD:
                t = dict[str, t]  # type: ignore[valid-type]
        params.append((p.name, t))

    return params, return_types(sig.return_annotation)


def return_types(annotation: Any) -> list[Any]:
    """Split a return annotation into its individual return values.

    A fixed-length ``tuple[A, B]`` is two returns; ``tuple[A, ...]`` is one
    container value.  ``None`` and a missing annotation are no returns.
    """
    if annotation is _empty or returns_nothing(annotation):
        return []
    if get_origin(annotation) is tuple:
        args = get_args(annotation)
        if args and not (len(args) == 2 and args[1] is Ellipsis):
            return list(args)
    return [annotation]


def returns_nothing(t: Any) -> bool:
    return t is None or t is type(None)


def callable_shape(t: Any) -> tuple[list[Any], Any] | None:
    """Return ``(param_types, return_type)`` if *t* is a callable type.

    Only fully specified shapes count: ``Callable[..., R]``, a bare
    ``Callable`` or a ``ParamSpec`` argument list yield ``None``.
    """
    if get_origin(t) is not collections.abc.Callable:
        return None
    args = get_args(t)
    if len(args) != 2:
        return None
    params, ret = args
    if not isinstance(params, (list, tuple)):
        return None
    return list(params), ret


def ref_elem(t: Any) -> Any | None:
    """Return the referenced type if *t* is ``Ref[X]``, else ``None``.

    A bare ``Ref`` references ``Any``.
    """
    if t is Ref:
        return Any
    if get_origin(t) is Ref:
        return get_args(t)[0]
    return None
