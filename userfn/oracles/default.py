"""Built-in type oracles.

:class:`DefaultOracle` accepts an explicit, closed set of data types;
:class:`PermissiveOracle` additionally accepts arbitrary user classes that
do not look like runtime machinery.
"""

from __future__ import annotations

import asyncio
import collections.abc
import dataclasses
import decimal
import enum
import inspect
import io
import logging
import queue
import socket
import threading
import types
import uuid
from datetime import date, datetime, time, timedelta
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from userfn._context import Context
from userfn._typex import EventTime, Ref
from userfn.oracles.base import TypeOracle

logger = logging.getLogger("userfn")

_SCALARS: frozenset[type] = frozenset(
    {
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        bytearray,
        decimal.Decimal,
        datetime,
        date,
        time,
        timedelta,
        uuid.UUID,
        EventTime,
    }
)

_CONTAINERS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        dict,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)

# Never data, even when a permissive oracle would otherwise accept a class.
_NON_DATA: tuple[type, ...] = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    threading.Thread,
    threading.Event,
    threading.Condition,
    threading.Semaphore,
    type(threading.Lock()),
    type(threading.RLock()),
    io.IOBase,
    socket.socket,
    types.ModuleType,
    collections.abc.Iterator,
    collections.abc.Callable,
    collections.abc.Awaitable,
    BaseException,
    types.UnionType,
    type(None),
    Ref,
    Context,
    type,
)


def _is_class(t: Any) -> bool:
    # list[int] passes isinstance(..., type) on some interpreters.
    return isinstance(t, type) and not isinstance(t, types.GenericAlias)


def _is_union(t: Any) -> bool:
    return get_origin(t) in (Union, types.UnionType)


def _is_namedtuple(t: type) -> bool:
    return issubclass(t, tuple) and hasattr(t, "_fields")


class DefaultOracle(TypeOracle):
    """Closed-world oracle.

    Concrete: scalars, enums, and dataclasses / NamedTuples whose fields are
    all element types.  Container: ``list``, ``tuple``, ``set``,
    ``frozenset``, ``dict`` and the ``collections.abc`` sequence, set and
    mapping ABCs over element types.  Universal: any ``TypeVar`` and ``Any``.
    Extra concrete types can be added with :meth:`register_concrete`.
    """

    def __init__(self) -> None:
        self._registered: set[type] = set()

    def register_concrete(self, t: type) -> None:
        """Treat *t* as a concrete element type from now on."""
        if not _is_class(t):
            raise TypeError(f"register_concrete expects a class, got {t!r}")
        self._registered.add(t)

    # -- TypeOracle -----------------------------------------------------------

    def is_container(self, t: Any) -> bool:
        return self._is_container(t, set())

    def is_concrete(self, t: Any) -> bool:
        return self._is_concrete(t, set())

    def is_universal(self, t: Any) -> bool:
        return isinstance(t, TypeVar) or t is Any

    # -- recursion ------------------------------------------------------------

    def _is_element(self, t: Any, seen: set[Any]) -> bool:
        return (
            self.is_universal(t)
            or self._is_container(t, seen)
            or self._is_concrete(t, seen)
        )

    def _is_container(self, t: Any, seen: set[Any]) -> bool:
        origin = get_origin(t)
        if origin is None:
            return _is_class(t) and t in _CONTAINERS
        if origin not in _CONTAINERS:
            return False
        args = get_args(t)
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                args = args[:1]
            elif args == ((),):
                args = ()
        return all(self._is_element(a, seen) for a in args)

    def _is_concrete(self, t: Any, seen: set[Any]) -> bool:
        origin = get_origin(t)
        if origin is not None:
            # A parameterised user generic, e.g. Box[int].  Unions never are.
            return (
                not _is_union(t)
                and _is_class(origin)
                and origin not in _CONTAINERS
                and self._is_concrete(origin, seen)
                and all(self._is_element(a, seen) for a in get_args(t))
            )
        if not _is_class(t):
            return False
        if t in _SCALARS or t in self._registered or issubclass(t, enum.Enum):
            return True
        if t in seen:
            # Recursive structure; decided by the outer call.
            return True
        if dataclasses.is_dataclass(t) or _is_namedtuple(t):
            seen.add(t)
            try:
                hints = get_type_hints(t)
            except (NameError, TypeError) as exc:
                logger.debug(
                    "userfn.unresolved_fields",
                    extra={"type": t.__qualname__, "error": str(exc)},
                )
                return False
            if dataclasses.is_dataclass(t):
                names = [f.name for f in dataclasses.fields(t)]
            else:
                names = list(t._fields)
            return all(self._is_element(hints.get(n, Any), seen) for n in names)
        return False


class PermissiveOracle(DefaultOracle):
    """Oracle that also accepts plain user classes as concrete types.

    Abstract classes, protocols, callable classes and runtime machinery
    (queues, locks, threads, files, sockets, iterators, exceptions) are
    still rejected.
    """

    def _is_concrete(self, t: Any, seen: set[Any]) -> bool:
        if super()._is_concrete(t, seen):
            return True
        if not _is_class(t) or t is object or t in _CONTAINERS:
            return False
        if inspect.isabstract(t) or getattr(t, "_is_protocol", False):
            return False
        return not issubclass(t, _NON_DATA)
