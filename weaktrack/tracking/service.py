"""Process-wide tracking service wiring the hook, registrar and endpoint."""

from __future__ import annotations

import threading
import weakref
from functools import lru_cache

from weaktrack.config import Settings, get_settings
from weaktrack.tracking.endpoint import ManagementEndpoint
from weaktrack.tracking.facade import ManagedTracker
from weaktrack.tracking.hook import FacadeHandle, bind_weakref_type
from weaktrack.tracking.registrar import Registrar, RegistrarState
from weaktrack.tracking.registry import StackDumper, TrackerConfig


class TrackingService:
    """Owns one facade handle, one registrar and the tracked ``WeakReference`` type.

    Counting starts only once the registrar has published a tracker; the
    tracker and its registry then live as long as the service.
    """

    def __init__(
        self,
        settings: Settings,
        endpoint: ManagementEndpoint | None = None,
        *,
        dumper: StackDumper | None = None,
        use_ready_signal: bool = False,
    ) -> None:
        self.settings = settings
        self.endpoint = endpoint or ManagementEndpoint()
        self.handle = FacadeHandle()
        self._dumper = dumper
        self._ready = threading.Event() if use_ready_signal else None
        self.registrar = Registrar(
            self.endpoint,
            self.handle,
            self._build_tracker,
            name=settings.object_name,
            delay_seconds=settings.registration_delay_seconds,
            ready=self._ready,
        )
        self.WeakReference: type[weakref.ref] = bind_weakref_type(self.handle)

    def _build_tracker(self) -> ManagedTracker:
        config = TrackerConfig(
            enabled=self.settings.enabled,
            stackdump_interval=self.settings.stackdump_interval,
        )
        return ManagedTracker(config, self._dumper)

    def start(self) -> bool:
        return self.registrar.start()

    def signal_ready(self) -> None:
        """Tell a waiting registrar that the endpoint accepts registrations."""

        if self._ready is not None:
            self._ready.set()

    @property
    def facade(self) -> ManagedTracker | None:
        return self.handle.current()

    @property
    def state(self) -> RegistrarState:
        return self.registrar.state


@lru_cache
def get_tracking_service() -> TrackingService:
    """Return the process-wide service, scheduling its registrar on first use.

    This is the instance ``create_app()`` serves unless it is handed another.
    """

    service = TrackingService(get_settings())
    service.start()
    return service
