"""structlog processor that renders user function descriptors in log entries.

Usage::

    import structlog
    from userfn.contrib.structlog import userfn_processor

    structlog.configure(
        processors=[
            userfn_processor,
            structlog.processors.JSONRenderer(),
        ]
    )

    log.info("registered", fn=describe(my_fn))

:class:`~userfn.UserFn`, :class:`~userfn.Param`,
:class:`~userfn.ReturnParam` and kind values anywhere at the top level of
the event dict are replaced by plain strings, lists and dicts so that any
renderer (JSON included) can serialize them.
"""

from __future__ import annotations

from typing import Any

from userfn._types import Param, ParamKind, ReturnKind, ReturnParam
from userfn._typex import type_repr
from userfn._userfn import UserFn


def _render(value: Any) -> Any:
    if isinstance(value, UserFn):
        return {
            "name": value.name,
            "params": [str(p.kind) for p in value.params],
            "returns": [str(r.kind) for r in value.returns],
        }
    if isinstance(value, (Param, ReturnParam)):
        return {"kind": str(value.kind), "type": type_repr(value.type)}
    if isinstance(value, (ParamKind, ReturnKind)):
        return str(value)
    return value


def userfn_processor(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor that flattens userfn values in the event dict.

    Values of other types are left untouched.
    """
    for key, value in event_dict.items():
        event_dict[key] = _render(value)
    return event_dict
