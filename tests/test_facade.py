"""Tests for the managed tracker and its management contract."""

from __future__ import annotations

import pytest

from weaktrack.tracking.facade import ManagedTracker, TrackerManagement
from weaktrack.tracking.registry import TrackerConfig


class Foo:
    pass


class A:
    pass


class B:
    pass


def _key(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


@pytest.fixture()
def dumps() -> list[tuple[str, int]]:
    return []


@pytest.fixture()
def tracker(dumps: list[tuple[str, int]]) -> ManagedTracker:
    return ManagedTracker(dumper=lambda key, count: dumps.append((key, count)))


def test_tracker_implements_management_contract(tracker: ManagedTracker) -> None:
    assert isinstance(tracker, TrackerManagement)


def test_defaults(tracker: ManagedTracker) -> None:
    assert tracker.is_enabled() is True
    assert tracker.get_stackdump_interval() == 100


def test_counts_match_number_of_records(tracker: ManagedTracker) -> None:
    for _ in range(5):
        tracker.record(Foo())
    tracker.record(None)
    tracker.record(None)

    counts = {entry.type_key: entry.count for entry in tracker.counts()}
    assert counts == {_key(Foo): 5, "null": 2}


def test_stackdump_fires_once_at_interval(tracker: ManagedTracker, dumps: list[tuple[str, int]]) -> None:
    tracker.set_stackdump_interval(3)
    for _ in range(3):
        tracker.record(Foo())

    assert dumps == [(_key(Foo), 3)]
    assert tracker.dump_by_name().splitlines() == [f"{_key(Foo)} -> 3"]


def test_interval_counts_per_type(tracker: ManagedTracker, dumps: list[tuple[str, int]]) -> None:
    tracker.set_stackdump_interval(2)
    tracker.record(A())
    tracker.record(B())
    assert dumps == []

    tracker.record(B())
    assert dumps == [(_key(B), 2)]


@pytest.mark.parametrize(("value", "expected"), [(-3, 1), (0, 1), (1, 1), (250, 250)])
def test_set_stackdump_interval_clamps(tracker: ManagedTracker, value: int, expected: int) -> None:
    tracker.set_stackdump_interval(value)

    assert tracker.get_stackdump_interval() == expected


def test_toggle_returns_negation_of_prior_value(tracker: ManagedTracker) -> None:
    for _ in range(3):
        before = tracker.is_enabled()
        assert tracker.toggle_enabled() is (not before)
        assert tracker.is_enabled() is (not before)


def test_disabled_records_are_dropped(tracker: ManagedTracker) -> None:
    tracker.set_enabled(False)
    for _ in range(5):
        tracker.record(Foo())
    tracker.set_enabled(True)
    tracker.record(Foo())

    assert tracker.dump_by_name().splitlines() == [f"{_key(Foo)} -> 1"]


def test_reset_empties_reports_but_keeps_config(tracker: ManagedTracker) -> None:
    tracker.set_stackdump_interval(7)
    tracker.set_enabled(False)
    tracker.set_enabled(True)
    tracker.record(Foo())
    tracker.reset()

    assert tracker.dump_by_name() == ""
    assert tracker.dump_by_count() == ""
    assert tracker.get_stackdump_interval() == 7
    assert tracker.is_enabled() is True

    tracker.record(Foo())
    assert tracker.dump_by_count().splitlines() == [f"1 -> {_key(Foo)}"]


def test_dump_orderings(tracker: ManagedTracker) -> None:
    tracker.record(B())
    tracker.record(A())
    tracker.record(A())

    assert tracker.dump_by_name().splitlines() == [f"{_key(A)} -> 2", f"{_key(B)} -> 1"]
    assert tracker.dump_by_count().splitlines() == [f"1 -> {_key(B)}", f"2 -> {_key(A)}"]


def test_config_is_shared_with_sampler(dumps: list[tuple[str, int]]) -> None:
    config = TrackerConfig(enabled=False, stackdump_interval=1)
    tracker = ManagedTracker(config, lambda key, count: dumps.append((key, count)))
    tracker.record(Foo())
    assert dumps == []

    config.enabled = True
    tracker.record(Foo())
    assert dumps == [(_key(Foo), 1)]
