"""The classified user function and the classifier that builds it."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from userfn._config import get_oracle
from userfn._errors import (
    DuplicateKind,
    NotAFunction,
    UnsupportedParameterType,
    UnsupportedReturnType,
)
from userfn._reflect import fn_name, fn_signature, is_function
from userfn._shapes import is_emit, is_iter, is_reiter
from userfn._types import Param, ParamKind, ReturnKind, ReturnParam
from userfn._typex import type_repr
from userfn.oracles.base import TypeOracle

logger = logging.getLogger("userfn")

# Kinds a well-formed function declares at most once.
_SINGLE_PARAM_KINDS = (ParamKind.CONTEXT, ParamKind.EVENT_TIME, ParamKind.TYPE_TOKEN)
_SINGLE_RETURN_KINDS = (ReturnKind.ERROR, ReturnKind.EVENT_TIME)


@dataclass(frozen=True, slots=True)
class UserFn:
    """A user function or method with its parameters and returns classified.

    Built once by :func:`classify` and only read afterwards; safe to share
    between threads.  The wrapped callable is excluded from equality, so two
    classifications of the same signature compare equal.
    """

    name: str
    fn: Callable[..., Any] = field(compare=False, repr=False)
    params: tuple[Param, ...] = ()
    returns: tuple[ReturnParam, ...] = ()

    # -- singleton lookups ----------------------------------------------------

    def find_context(self) -> int | None:
        """Index of the context parameter, or ``None``.

        The context should be the first parameter by convention.
        """
        return _first(self.params, ParamKind.CONTEXT)

    def find_type_token(self) -> int | None:
        """Index of the type token parameter, or ``None``."""
        return _first(self.params, ParamKind.TYPE_TOKEN)

    def find_event_time(self) -> int | None:
        """Index of the event timestamp parameter, or ``None``."""
        return _first(self.params, ParamKind.EVENT_TIME)

    def find_error(self) -> int | None:
        """Index of the error return, or ``None``."""
        return _first(self.returns, ReturnKind.ERROR)

    def find_out_event_time(self) -> int | None:
        """Index of the event timestamp return, or ``None``."""
        return _first(self.returns, ReturnKind.EVENT_TIME)

    # -- masks and projections ------------------------------------------------

    def filter_params(self, mask: ParamKind) -> list[int]:
        """Indices of the parameters whose kind intersects *mask*."""
        return [i for i, p in enumerate(self.params) if p.kind & mask]

    def filter_returns(self, mask: ReturnKind) -> list[int]:
        """Indices of the returns whose kind intersects *mask*."""
        return [i for i, r in enumerate(self.returns) if r.kind & mask]

    def select_params(self, *indices: int) -> tuple[Param, ...]:
        return sub_params(self.params, *indices)

    def select_returns(self, *indices: int) -> tuple[ReturnParam, ...]:
        return sub_returns(self.returns, *indices)

    def __str__(self) -> str:
        params = ", ".join(str(p.kind) for p in self.params)
        returns = ", ".join(str(r.kind) for r in self.returns)
        return f"{self.name}({params}) -> ({returns})"


def _first(slots: Sequence[Param] | Sequence[ReturnParam], kind: Any) -> int | None:
    for i, s in enumerate(slots):
        if s.kind == kind:
            return i
    return None


def sub_params(params: Sequence[Param], *indices: int) -> tuple[Param, ...]:
    """Return the params at *indices*, in the order the indices are given."""
    return tuple(params[i] for i in indices)


def sub_returns(
    returns: Sequence[ReturnParam], *indices: int
) -> tuple[ReturnParam, ...]:
    """Return the return params at *indices*, in the order given."""
    return tuple(returns[i] for i in indices)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(
    fn: Any,
    *,
    name: str | None = None,
    strict: bool = False,
    oracle: TypeOracle | None = None,
) -> UserFn:
    """Classify the parameters and returns of *fn*.

    Parameters
    ----------
    fn:
        A function, method, ``functools.partial`` or callable instance with
        annotated parameters.
    name:
        Debug name to report instead of the derived ``module.qualname``.
    strict:
        Reject signatures that declare a context, event timestamp or type
        token parameter (or an error or timestamp return) more than once.
    oracle:
        Type oracle to use instead of the globally configured one.

    Raises
    ------
    NotAFunction
        If *fn* is not callable or is a class.
    UnresolvableSignature
        If the signature or its annotations cannot be read.
    UnsupportedParameterType, UnsupportedReturnType
        If a slot matches no known kind.
    DuplicateKind
        In strict mode, if a singleton kind occurs twice.
    """
    if not is_function(fn):
        raise NotAFunction(fn)

    name = name or fn_name(fn)
    oracle = oracle or get_oracle()
    in_types, out_types = fn_signature(fn, name)

    params: list[Param] = []
    for i, (param_name, t) in enumerate(in_types):
        kind = _param_kind(t, oracle)
        if not kind:
            _log_rejected(name, "parameter", i, t)
            raise UnsupportedParameterType(name, i, t, param_name)
        params.append(Param(kind=kind, type=t, name=param_name))

    returns: list[ReturnParam] = []
    for i, t in enumerate(out_types):
        ret_kind = _return_kind(t, oracle)
        if not ret_kind:
            _log_rejected(name, "return", i, t)
            raise UnsupportedReturnType(name, i, t)
        returns.append(ReturnParam(kind=ret_kind, type=t))

    u = UserFn(name=name, fn=fn, params=tuple(params), returns=tuple(returns))
    if strict:
        _check_unique(u)

    # TODO: validate parameter order (context, then timestamp, then values).
    logger.debug(
        "userfn.classified",
        extra={
            "fn": name,
            "params": [str(p.kind) for p in u.params],
            "returns": [str(r.kind) for r in u.returns],
        },
    )
    return u


new = classify


def _param_kind(t: Any, oracle: TypeOracle) -> ParamKind:
    if t is inspect.Parameter.empty:
        return ParamKind.ILLEGAL
    if t is oracle.context_type:
        return ParamKind.CONTEXT
    if t is oracle.event_time_type:
        return ParamKind.EVENT_TIME
    if t is oracle.type_token_type:
        return ParamKind.TYPE_TOKEN
    if oracle.is_element(t):
        return ParamKind.VALUE
    if is_emit(t, oracle):
        return ParamKind.EMIT
    if is_iter(t, oracle):
        return ParamKind.ITER
    if is_reiter(t, oracle):
        return ParamKind.RE_ITER
    return ParamKind.ILLEGAL


def _return_kind(t: Any, oracle: TypeOracle) -> ReturnKind:
    if oracle.is_error(t):
        return ReturnKind.ERROR
    if t is oracle.event_time_type:
        return ReturnKind.EVENT_TIME
    if oracle.is_element(t):
        return ReturnKind.VALUE
    return ReturnKind.ILLEGAL


def _check_unique(u: UserFn) -> None:
    for kind in _SINGLE_PARAM_KINDS:
        indices = u.filter_params(kind)
        if len(indices) > 1:
            _log_rejected(u.name, "parameter", indices[1], u.params[indices[1]].type)
            raise DuplicateKind(u.name, f"{kind} parameter", indices)
    for ret_kind in _SINGLE_RETURN_KINDS:
        indices = u.filter_returns(ret_kind)
        if len(indices) > 1:
            _log_rejected(u.name, "return", indices[1], u.returns[indices[1]].type)
            raise DuplicateKind(u.name, f"{ret_kind} return", indices)


def _log_rejected(name: str, position: str, index: int, t: Any) -> None:
    logger.debug(
        "userfn.rejected",
        extra={
            "fn": name,
            "position": position,
            "index": index,
            "received": type_repr(t),
        },
    )
