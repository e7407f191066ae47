"""Abstract base class for type-classification oracles."""

from __future__ import annotations

import types
import typing
from abc import ABC, abstractmethod
from typing import Any

from userfn._context import Context
from userfn._typex import EventTime


class TypeOracle(ABC):
    """Interface that decides which annotations are pipeline element types.

    Also supplies the canonical types the classifier matches by identity.
    Subclasses may override the canonical handles as class attributes.
    """

    context_type: Any = Context
    event_time_type: Any = EventTime
    type_token_type: Any = type
    error_type: Any = Exception

    @abstractmethod
    def is_container(self, t: Any) -> bool:
        """True if *t* is a collection whose members are element types."""

    @abstractmethod
    def is_concrete(self, t: Any) -> bool:
        """True if *t* is a concrete data type."""

    @abstractmethod
    def is_universal(self, t: Any) -> bool:
        """True if *t* is a generic placeholder bound later."""

    def is_element(self, t: Any) -> bool:
        return self.is_container(t) or self.is_concrete(t) or self.is_universal(t)

    def is_error(self, t: Any) -> bool:
        """True for the error type or an optional error (``Exception | None``)."""
        if t is self.error_type:
            return True
        if typing.get_origin(t) in (typing.Union, types.UnionType):
            args = typing.get_args(t)
            return len(args) == 2 and self.error_type in args and type(None) in args
        return False
