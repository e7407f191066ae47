"""Process-wide choice of type oracle."""

from __future__ import annotations

import threading
from collections.abc import Callable

from userfn.oracles.base import TypeOracle
from userfn.oracles.default import DefaultOracle, PermissiveOracle

_ORACLES: dict[str, Callable[[], TypeOracle]] = {
    "default": DefaultOracle,
    "permissive": PermissiveOracle,
}

_lock = threading.Lock()
_oracle: TypeOracle | None = None


def _build(oracle: TypeOracle | str) -> TypeOracle:
    if isinstance(oracle, TypeOracle):
        return oracle
    try:
        factory = _ORACLES[oracle]
    except KeyError:
        raise ValueError(
            f"Unknown oracle: {oracle!r} (expected one of {sorted(_ORACLES)} "
            "or a TypeOracle instance)"
        ) from None
    return factory()


def configure(oracle: TypeOracle | str = "default") -> None:
    """Install the oracle :func:`~userfn.classify` consults by default.

    Pass a :class:`TypeOracle` instance, or the name of a built-in one:
    ``"default"`` (closed world) or ``"permissive"`` (plain user classes are
    element types too).  An explicit ``oracle=`` argument to ``classify``
    still wins.
    """
    global _oracle
    built = _build(oracle)
    with _lock:
        _oracle = built


def get_oracle() -> TypeOracle:
    """Return the installed oracle; a :class:`DefaultOracle` if none was."""
    global _oracle
    current = _oracle
    if current is not None:
        return current
    with _lock:
        if _oracle is None:
            _oracle = DefaultOracle()
        return _oracle


def reset() -> None:
    """Forget the installed oracle so the next lookup builds a fresh default."""
    global _oracle
    with _lock:
        _oracle = None
