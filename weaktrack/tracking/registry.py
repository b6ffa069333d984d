"""Allocation counting registry and stack sampling."""

from __future__ import annotations

import os
import threading
import traceback
from collections import Counter
from typing import Any, Callable

from weaktrack.lib.logger import get_logger
from weaktrack.tracking.schemas import CountEntry

NULL_KEY = "null"
DEFAULT_STACKDUMP_INTERVAL = 100

StackDumper = Callable[[str, int], None]

logger = get_logger(__name__)

# Frames from this package are trimmed from stack dumps
_TRACKING_PREFIX = os.path.dirname(os.path.abspath(__file__)) + os.sep


def clamp_interval(interval: int) -> int:
    return interval if interval > 0 else 1


def type_key(referent: Any) -> str:
    """Return the fully-qualified type name of ``referent`` or ``"null"``."""

    if referent is None:
        return NULL_KEY
    cls = type(referent)
    return f"{cls.__module__}.{cls.__qualname__}"


class TrackerConfig:
    """Mutable tracker flags shared by the facade and the sampler."""

    def __init__(self, enabled: bool = True, stackdump_interval: int = DEFAULT_STACKDUMP_INTERVAL) -> None:
        self.enabled = enabled
        self._stackdump_interval = clamp_interval(stackdump_interval)

    @property
    def stackdump_interval(self) -> int:
        return self._stackdump_interval

    @stackdump_interval.setter
    def stackdump_interval(self, interval: int) -> None:
        self._stackdump_interval = clamp_interval(interval)

    def __repr__(self) -> str:
        return f"TrackerConfig(enabled={self.enabled!r}, stackdump_interval={self._stackdump_interval!r})"


class AllocationRegistry:
    """Counts per type key; every mutation and snapshot holds the same lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()

    def increment(self, key: str) -> int:
        """Add one to ``key`` and return the new count."""

        with self._lock:
            self._counts[key] += 1
            return self._counts[key]

    def count(self, key: str) -> int:
        with self._lock:
            return self._counts.get(key, 0)

    def snapshot(self) -> list[CountEntry]:
        """Copy the counts under the lock; callers sort and render the copy."""

        with self._lock:
            items = list(self._counts.items())
        return [CountEntry(type_key=key, count=count) for key, count in items]

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)


def dump_stack(key: str, count: int) -> None:
    """Log the caller's stack, minus the tracker's own frames."""

    frames = traceback.extract_stack()
    while frames and os.path.abspath(frames[-1].filename).startswith(_TRACKING_PREFIX):
        frames.pop()
    logger.warning(
        "tracker.stackdump",
        extra={
            "type_key": key,
            "count": count,
            "stack": "".join(traceback.format_list(frames)),
        },
    )


class StackSampler:
    """Triggers a stack dump every ``config.stackdump_interval`` records of a key."""

    def __init__(self, config: TrackerConfig, dumper: StackDumper | None = None) -> None:
        self._config = config
        self._dumper = dumper or dump_stack

    def observe(self, key: str, count: int) -> bool:
        if count % self._config.stackdump_interval != 0:
            return False
        self._dumper(key, count)
        return True
