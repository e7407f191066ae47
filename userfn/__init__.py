"""userfn: classify pipeline user functions by their signatures."""

from userfn._config import configure, get_oracle, reset
from userfn._context import Context
from userfn._decorators import dofn, userfn_of
from userfn._errors import (
    DuplicateKind,
    NotAFunction,
    UnresolvableSignature,
    UnsupportedParameterType,
    UnsupportedReturnType,
    UserFnError,
)
from userfn._registry import FnRegistry, describe
from userfn._shapes import emit_elements, is_emit, is_iter, is_reiter, iter_elements
from userfn._types import Param, ParamKind, ReturnKind, ReturnParam
from userfn._typex import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    EventTime,
    Ref,
    T,
    U,
    V,
    W,
    X,
    Y,
    Z,
)
from userfn._userfn import UserFn, classify, new, sub_params, sub_returns
from userfn.oracles.base import TypeOracle
from userfn.oracles.default import DefaultOracle, PermissiveOracle

__all__ = [
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "Context",
    "DefaultOracle",
    "DuplicateKind",
    "EventTime",
    "FnRegistry",
    "NotAFunction",
    "Param",
    "ParamKind",
    "PermissiveOracle",
    "Ref",
    "ReturnKind",
    "ReturnParam",
    "T",
    "TypeOracle",
    "U",
    "UnresolvableSignature",
    "UnsupportedParameterType",
    "UnsupportedReturnType",
    "UserFn",
    "UserFnError",
    "V",
    "W",
    "X",
    "Y",
    "Z",
    "classify",
    "configure",
    "describe",
    "dofn",
    "emit_elements",
    "get_oracle",
    "is_emit",
    "is_iter",
    "is_reiter",
    "iter_elements",
    "new",
    "reset",
    "sub_params",
    "sub_returns",
    "userfn_of",
]
