"""Tests for userfn._reflect."""

from __future__ import annotations

import functools
import inspect
import typing
from collections.abc import Callable
from typing import Any

import pytest

from userfn._errors import UnresolvableSignature
from userfn._reflect import (
    callable_shape,
    fn_name,
    fn_signature,
    is_function,
    ref_elem,
    return_types,
)
from userfn._typex import Ref


def annotated(a: int, *rest: str, flag: bool, **opts: float) -> tuple[int, str]:
    raise NotImplementedError


def unannotated(a, b):  # type: ignore[no-untyped-def]
    return a


class Caller:
    def __call__(self) -> None:
        pass


class TestIsFunction:
    def test_accepts_callables(self) -> None:
        assert is_function(annotated)
        assert is_function(functools.partial(annotated, 1))
        assert is_function(Caller())
        assert is_function(len)

    def test_rejects_classes_and_values(self) -> None:
        assert not is_function(Caller)
        assert not is_function(1)


class TestFnName:
    def test_function(self) -> None:
        assert fn_name(annotated).endswith("test_reflect.annotated")

    def test_builtin(self) -> None:
        assert fn_name(len) == "builtins.len"

    def test_callable_instance(self) -> None:
        assert fn_name(Caller()).endswith("test_reflect.Caller.__call__")

    def test_nested_partial(self) -> None:
        p = functools.partial(functools.partial(annotated, 1), flag=True)
        assert fn_name(p).startswith("functools.partial(")


class TestFnSignature:
    def test_kinds_of_parameters(self) -> None:
        params, returns = fn_signature(annotated, "annotated")
        assert params == [
            ("a", int),
            ("rest", tuple[str, ...]),
            ("flag", bool),
            ("opts", dict[str, float]),
        ]
        assert returns == [int, str]

    def test_unannotated(self) -> None:
        params, returns = fn_signature(unannotated, "unannotated")
        assert params == [
            ("a", inspect.Parameter.empty),
            ("b", inspect.Parameter.empty),
        ]
        assert returns == []

    def test_no_signature(self) -> None:
        class NoSig:
            __signature__ = "not a signature"

            def __call__(self) -> None:
                pass

        with pytest.raises(UnresolvableSignature, match="cannot read signature"):
            fn_signature(NoSig(), "NoSig")


class TestReturnTypes:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (inspect.Signature.empty, []),
            (None, []),
            (type(None), []),
            (int, [int]),
            (tuple[int, str], [int, str]),
            (typing.Tuple[int, str], [int, str]),
            (tuple[int, ...], [tuple[int, ...]]),
            (list[int], [list[int]]),
        ],
    )
    def test_split(self, annotation: Any, expected: list[Any]) -> None:
        assert return_types(annotation) == expected


class TestCallableShape:
    def test_shape(self) -> None:
        assert callable_shape(Callable[[int, str], bool]) == ([int, str], bool)
        assert callable_shape(Callable[[], int]) == ([], int)

    def test_typing_spelling(self) -> None:
        params, ret = callable_shape(typing.Callable[[int], None])  # type: ignore[misc]
        assert params == [int]
        assert ret in (None, type(None))

    @pytest.mark.parametrize("t", [Callable, Callable[..., int], int, list[int]])
    def test_not_a_shape(self, t: Any) -> None:
        assert callable_shape(t) is None


class TestRefElem:
    def test_ref(self) -> None:
        assert ref_elem(Ref[int]) is int
        assert ref_elem(Ref[list[str]]) == list[str]

    def test_bare_ref(self) -> None:
        assert ref_elem(Ref) is Any

    def test_not_a_ref(self) -> None:
        assert ref_elem(int) is None
        assert ref_elem(list[int]) is None
