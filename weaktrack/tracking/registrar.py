"""One-shot background publication of the tracker on the management endpoint."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Callable

from weaktrack.lib.logger import get_logger
from weaktrack.tracking.endpoint import ManagementEndpoint
from weaktrack.tracking.errors import RegistrationFailedError
from weaktrack.tracking.facade import ManagedTracker
from weaktrack.tracking.hook import FacadeHandle

logger = get_logger(__name__)


class RegistrarState(str, Enum):
    UNSTARTED = "unstarted"
    WAITING = "waiting"
    PUBLISHED = "published"
    FAILED = "failed"


class Registrar:
    """Publishes a freshly built tracker exactly once.

    The task first waits for the endpoint: on ``ready`` when the host offers
    that signal, otherwise for ``delay_seconds``. The fixed delay is a timing
    assumption about how long the host needs to bring its endpoint up; a delay
    that is too short fails registration and is not retried.
    """

    def __init__(
        self,
        endpoint: ManagementEndpoint,
        handle: FacadeHandle,
        factory: Callable[[], ManagedTracker],
        *,
        name: str,
        delay_seconds: float = 1.0,
        ready: threading.Event | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._handle = handle
        self._factory = factory
        self._name = name
        self._delay_seconds = delay_seconds
        self._ready = ready
        self._state = RegistrarState.UNSTARTED
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> RegistrarState:
        return self._state

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> bool:
        """Schedule the registration task; returns False if it was scheduled or ran."""

        with self._lock:
            if self._thread is not None or self._state is not RegistrarState.UNSTARTED:
                logger.debug("registrar.start.skip", extra={"object_name": self._name})
                return False
            self._thread = threading.Thread(target=self.run, name="weaktrack-registrar", daemon=True)
        self._thread.start()
        return True

    def join(self, timeout: float | None = None) -> RegistrarState:
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self._state

    def run(self) -> ManagedTracker:
        """Wait, build, register and publish; raises if registration fails."""

        with self._lock:
            if self._state is not RegistrarState.UNSTARTED:
                raise RuntimeError(f"Registrar already ran (state={self._state.value})")
            self._state = RegistrarState.WAITING

        self._wait_for_endpoint()
        try:
            facade = self._factory()
            self._endpoint.register(self._name, facade)
            self._handle.publish(facade)
        except Exception as exc:
            self._state = RegistrarState.FAILED
            logger.exception("registrar.failed", extra={"object_name": self._name})
            raise RegistrationFailedError(f"Could not publish tracker as '{self._name}'") from exc

        self._state = RegistrarState.PUBLISHED
        logger.info("registrar.published", extra={"object_name": self._name})
        return facade

    def _wait_for_endpoint(self) -> None:
        if self._ready is not None:
            self._ready.wait()
        elif self._delay_seconds > 0:
            time.sleep(self._delay_seconds)
