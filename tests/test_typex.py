"""Tests for userfn._typex."""

from __future__ import annotations

import inspect
from datetime import datetime, timedelta, timezone

import pytest

from userfn._typex import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    EventTime,
    Ref,
    type_repr,
)


class TestEventTime:
    def test_is_int(self) -> None:
        t = EventTime(1500)
        assert t == 1500
        assert isinstance(t, int)

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            EventTime(MAX_TIMESTAMP + 1)
        with pytest.raises(ValueError, match="out of range"):
            EventTime(MIN_TIMESTAMP - 1)

    def test_bounds_accepted(self) -> None:
        assert EventTime(MAX_TIMESTAMP) == MAX_TIMESTAMP
        assert EventTime(MIN_TIMESTAMP) == MIN_TIMESTAMP

    def test_from_datetime(self) -> None:
        dt = datetime(1970, 1, 1, 0, 0, 1, 250_000, tzinfo=timezone.utc)
        assert EventTime.from_datetime(dt) == 1250

    def test_naive_datetime_is_utc(self) -> None:
        assert EventTime.from_datetime(datetime(1970, 1, 2)) == 86_400_000

    def test_other_timezone(self) -> None:
        plus_one = timezone(timedelta(hours=1))
        dt = datetime(1970, 1, 1, 1, 0, tzinfo=plus_one)
        assert EventTime.from_datetime(dt) == 0

    def test_to_datetime(self) -> None:
        assert EventTime(1250).to_datetime() == datetime(
            1970, 1, 1, 0, 0, 1, 250_000, tzinfo=timezone.utc
        )

    def test_now_is_recent(self) -> None:
        before = datetime.now(timezone.utc) - timedelta(seconds=5)
        assert EventTime.now().to_datetime() > before

    def test_repr(self) -> None:
        assert repr(EventTime(3)) == "EventTime(3)"


class TestRef:
    def test_unset(self) -> None:
        r: Ref[int] = Ref()
        assert not r.is_set
        with pytest.raises(LookupError):
            _ = r.value

    def test_set_and_get(self) -> None:
        r: Ref[str] = Ref()
        r.set("a")
        assert r.is_set
        assert r.get() == "a"
        r.value = "b"
        assert r.value == "b"

    def test_parameterised_construction(self) -> None:
        r = Ref[int]()
        r.set(1)
        assert r.get() == 1


class TestTypeRepr:
    def test_builtin(self) -> None:
        assert type_repr(int) == "int"

    def test_qualified(self) -> None:
        assert type_repr(EventTime) == "userfn._typex.EventTime"

    def test_missing_annotation(self) -> None:
        assert type_repr(inspect.Parameter.empty) == "no annotation"

    def test_none(self) -> None:
        assert type_repr(None) == "None"
        assert type_repr(type(None)) == "None"

    def test_generic(self) -> None:
        assert type_repr(list[int]) == "list[int]"
