"""Shared fixtures: every test starts with a fresh oracle and an empty cache."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from userfn._config import reset
from userfn._registry import _registry


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    reset()
    _registry.clear()
    yield
    reset()
    _registry.clear()
