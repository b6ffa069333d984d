"""Construction hook attached to ``weakref.ref``."""

from __future__ import annotations

import threading
import weakref
from typing import Any, Callable

from weaktrack.tracking.errors import AlreadyPublishedError
from weaktrack.tracking.facade import ManagedTracker


class FacadeHandle:
    """Slot holding the published tracker; empty until registration succeeds."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._facade: ManagedTracker | None = None

    def publish(self, facade: ManagedTracker) -> None:
        with self._lock:
            if self._facade is not None:
                raise AlreadyPublishedError("Tracker already published")
            self._facade = facade

    def current(self) -> ManagedTracker | None:
        return self._facade

    @property
    def published(self) -> bool:
        return self._facade is not None


def record_construction(handle: FacadeHandle, referent: Any) -> None:
    """Count one weak reference to ``referent``; dropped before publication."""

    facade = handle.current()
    if facade is not None:
        facade.record(referent)


def bind_weakref_type(handle: FacadeHandle, name: str = "WeakReference") -> type[weakref.ref]:
    """Return a ``weakref.ref`` subclass that reports constructions to ``handle``.

    Referent lifetime, clearing and callbacks are those of ``weakref.ref``.
    Unlike the base type, each call creates a distinct reference object, so
    every construction is counted.
    """

    def __init__(self: weakref.ref, referent: Any, callback: Callable[[weakref.ref], Any] | None = None) -> None:
        weakref.ref.__init__(self, referent, callback)
        record_construction(handle, referent)

    return type(name, (weakref.ref,), {"__init__": __init__, "__module__": __name__})
