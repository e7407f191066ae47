"""Tests for userfn._config."""

from __future__ import annotations

from typing import Any

import pytest

from userfn._config import configure, get_oracle, reset
from userfn.oracles.base import TypeOracle
from userfn.oracles.default import DefaultOracle, PermissiveOracle


class _NothingOracle(TypeOracle):
    def is_container(self, t: Any) -> bool:
        return False

    def is_concrete(self, t: Any) -> bool:
        return False

    def is_universal(self, t: Any) -> bool:
        return False


class TestConfigure:
    def test_configure_default(self) -> None:
        configure("default")
        oracle = get_oracle()
        assert type(oracle) is DefaultOracle

    def test_configure_permissive(self) -> None:
        configure("permissive")
        assert isinstance(get_oracle(), PermissiveOracle)

    def test_configure_with_instance(self) -> None:
        instance = _NothingOracle()
        configure(instance)
        assert get_oracle() is instance

    def test_configure_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown oracle"):
            configure("bogus")

    def test_failed_configure_keeps_previous(self) -> None:
        configure("permissive")
        before = get_oracle()
        with pytest.raises(ValueError, match="default.*permissive"):
            configure("strict")
        assert get_oracle() is before


class TestGetOracle:
    def test_default_on_first_call(self) -> None:
        # No configure() call, so get_oracle should create the default
        assert type(get_oracle()) is DefaultOracle

    def test_returns_same_instance(self) -> None:
        assert get_oracle() is get_oracle()


class TestReset:
    def test_reset_clears_oracle(self) -> None:
        configure("permissive")
        o1 = get_oracle()
        reset()
        o2 = get_oracle()
        assert o1 is not o2
        assert type(o2) is DefaultOracle
