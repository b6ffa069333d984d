"""Management contract and the live tracker that implements it."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from weaktrack.tracking import reporter
from weaktrack.tracking.registry import (
    AllocationRegistry,
    StackDumper,
    StackSampler,
    TrackerConfig,
    type_key,
)
from weaktrack.tracking.schemas import CountEntry


@runtime_checkable
class TrackerManagement(Protocol):
    """Operations exposed through the management endpoint."""

    def is_enabled(self) -> bool: ...

    def set_enabled(self, flag: bool) -> None: ...

    def toggle_enabled(self) -> bool: ...

    def get_stackdump_interval(self) -> int: ...

    def set_stackdump_interval(self, interval: int) -> None: ...

    def reset(self) -> None: ...

    def dump_by_name(self) -> str: ...

    def dump_by_count(self) -> str: ...


class ManagedTracker:
    """Records weak reference constructions per referent type.

    Safe for concurrent callers. Flag reads and writes rely on attribute
    assignment being atomic; counts are guarded by the registry lock, and the
    stack sampler runs after that lock is released.
    """

    def __init__(self, config: TrackerConfig | None = None, dumper: StackDumper | None = None) -> None:
        self._config = config or TrackerConfig()
        self._registry = AllocationRegistry()
        self._sampler = StackSampler(self._config, dumper)

    def record(self, referent: Any) -> None:
        if not self._config.enabled:
            return
        key = type_key(referent)
        count = self._registry.increment(key)
        self._sampler.observe(key, count)

    def counts(self) -> list[CountEntry]:
        return self._registry.snapshot()

    def is_enabled(self) -> bool:
        return self._config.enabled

    def set_enabled(self, flag: bool) -> None:
        self._config.enabled = bool(flag)

    def toggle_enabled(self) -> bool:
        # Last write wins against concurrent set_enabled; returns what was set
        enabled = not self._config.enabled
        self._config.enabled = enabled
        return enabled

    def get_stackdump_interval(self) -> int:
        return self._config.stackdump_interval

    def set_stackdump_interval(self, interval: int) -> None:
        self._config.stackdump_interval = interval

    def reset(self) -> None:
        """Drop every count; flags and interval are left untouched."""

        self._registry.reset()

    def dump_by_name(self) -> str:
        return reporter.render_by_name(self._registry.snapshot())

    def dump_by_count(self) -> str:
        return reporter.render_by_count(self._registry.snapshot())
