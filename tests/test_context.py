"""Tests for userfn._context."""

from __future__ import annotations

from userfn._context import Context


class TestContext:
    def test_generates_invocation_id(self) -> None:
        ctx = Context()
        assert isinstance(ctx.invocation_id, str)
        assert len(ctx.invocation_id) == 32

    def test_explicit_id_and_values(self) -> None:
        ctx = Context("abc", {"k": 1})
        assert ctx.invocation_id == "abc"
        assert ctx.get_value("k") == 1
        assert ctx.get_value("missing", "d") == "d"

    def test_with_value_does_not_touch_parent(self) -> None:
        parent = Context("p", {"a": 1})
        child = parent.with_value("b", 2)
        assert child.invocation_id == "p"
        assert child.get_value("a") == 1
        assert child.get_value("b") == 2
        assert parent.get_value("b") is None

    def test_with_value_shadows(self) -> None:
        child = Context(values={"a": 1}).with_value("a", 2)
        assert child.get_value("a") == 2
        assert child.values == {"a": 2}

    def test_fork_deep_copies(self) -> None:
        parent = Context("p", {"items": [1]})
        forked = parent.fork()
        forked.get_value("items").append(2)
        assert parent.get_value("items") == [1]
        assert forked.invocation_id == "p"

    def test_fork_flattens_chain(self) -> None:
        ctx = Context(values={"a": 1}).with_value("b", 2).fork()
        assert ctx.values == {"a": 1, "b": 2}
