"""Structural matchers for emitter, iterator and re-iterator parameters.

The classifier tries them in the order emit, iter, reiter.  Emitters and
iterators both take one or two arguments; the return type (``None`` versus
``bool``) tells them apart and is checked before the argument count.  A
re-iterator takes no arguments, so it cannot collide with either.
"""

from __future__ import annotations

from typing import Any

from userfn._config import get_oracle
from userfn._reflect import callable_shape, ref_elem, returns_nothing
from userfn.oracles.base import TypeOracle


def emit_elements(t: Any, oracle: TypeOracle | None = None) -> list[Any] | None:
    """Return the element types emitted by *t*, or ``None`` if not an emitter.

    Accepted shapes, each returning ``None``::

        Callable[[V], None]
        Callable[[K, V], None]
        Callable[[EventTime, V], None]
        Callable[[EventTime, K, V], None]

    The optional leading timestamp is not part of the result.
    """
    shape = callable_shape(t)
    if shape is None:
        return None
    params, ret = shape
    if not returns_nothing(ret):
        return None

    oracle = oracle or get_oracle()
    is_elem = oracle.is_element
    timestamp = oracle.event_time_type

    if len(params) == 3:
        if params[0] is timestamp and is_elem(params[1]) and is_elem(params[2]):
            return params[1:]
        return None
    if len(params) == 2:
        if params[0] is timestamp:
            return params[1:] if is_elem(params[1]) else None
        if is_elem(params[0]) and is_elem(params[1]):
            return params
        return None
    if len(params) == 1:
        return params if is_elem(params[0]) else None
    return None


def iter_elements(t: Any, oracle: TypeOracle | None = None) -> list[Any] | None:
    """Return the element types produced by iterator *t*, or ``None``.

    Accepted shapes::

        Callable[[Ref[V]], bool]
        Callable[[Ref[K], Ref[V]], bool]
    """
    shape = callable_shape(t)
    if shape is None:
        return None
    params, ret = shape
    if ret is not bool:
        return None
    if len(params) not in (1, 2):
        return None

    oracle = oracle or get_oracle()
    elems = []
    for p in params:
        elem = ref_elem(p)
        if elem is None or not oracle.is_element(elem):
            return None
        elems.append(elem)
    return elems


def is_emit(t: Any, oracle: TypeOracle | None = None) -> bool:
    """True if *t* is an emitter: a callable returning nothing."""
    return emit_elements(t, oracle) is not None


def is_iter(t: Any, oracle: TypeOracle | None = None) -> bool:
    """True if *t* is an iterator over write-through references."""
    return iter_elements(t, oracle) is not None


def is_reiter(t: Any, oracle: TypeOracle | None = None) -> bool:
    """True if *t* is a re-iterable iterator.

    A re-iterator is a zero-argument callable returning an iterator, such as
    ``Callable[[], Callable[[Ref[int]], bool]]``.  Each call starts a fresh
    pass over the same input.
    """
    shape = callable_shape(t)
    if shape is None:
        return False
    params, ret = shape
    return not params and is_iter(ret, oracle)
