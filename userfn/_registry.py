"""Thread-safe cache of classified user functions."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from userfn._userfn import UserFn, _check_unique, classify


def _key(fn: Any) -> Any:
    # Callable instances may be unhashable; fall back to identity.  The cached
    # UserFn keeps fn alive, so the id cannot be reused while cached.
    try:
        hash(fn)
    except TypeError:
        return ("id", id(fn))
    return fn


class FnRegistry:
    """Classifies each user function once and hands out the cached result."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fns: dict[Any, UserFn] = {}

    def register(self, u: UserFn) -> None:
        """Cache an already classified function.

        Idempotent for an equal descriptor, raises on conflict.
        """
        key = _key(u.fn)
        with self._lock:
            existing = self._fns.get(key)
            if existing is not None:
                if existing != u:
                    raise ValueError(
                        f"Conflicting registration for '{u.name}': "
                        f"{existing} vs {u}"
                    )
                return
            self._fns[key] = u

    def get_or_classify(self, fn: Callable[..., Any], **kwargs: Any) -> UserFn:
        """Return the cached :class:`UserFn` for *fn*, classifying on a miss.

        *kwargs* are passed to :func:`~userfn.classify` on a miss.  A hit
        still honours ``strict=True`` by re-checking the cached descriptor;
        the other options only apply on a miss.  Failures are not cached.
        """
        key = _key(fn)
        with self._lock:
            cached = self._fns.get(key)
        if cached is not None:
            if kwargs.get("strict"):
                _check_unique(cached)
            return cached
        # Classify outside the lock; it is pure, so a racing duplicate is
        # equal and setdefault keeps the first.
        u = classify(fn, **kwargs)
        with self._lock:
            return self._fns.setdefault(key, u)

    def get(self, fn: Callable[..., Any]) -> UserFn:
        """Return the cached UserFn. Raises KeyError if *fn* is not cached."""
        with self._lock:
            u = self._fns.get(_key(fn))
        if u is None:
            raise KeyError(f"Function '{getattr(fn, '__qualname__', fn)}' not registered")
        return u

    def __contains__(self, fn: object) -> bool:
        with self._lock:
            return _key(fn) in self._fns

    def __len__(self) -> int:
        with self._lock:
            return len(self._fns)

    def clear(self) -> None:
        """Remove all cached functions. Intended for testing."""
        with self._lock:
            self._fns.clear()


_registry = FnRegistry()


def describe(fn: Callable[..., Any]) -> UserFn:
    """Return the :class:`UserFn` for *fn*, classifying it once per process."""
    return _registry.get_or_classify(fn)
