"""In-process management endpoint mapping well-known names to live objects."""

from __future__ import annotations

import threading

from weaktrack.config import DEFAULT_OBJECT_NAME
from weaktrack.lib.logger import get_logger
from weaktrack.tracking.errors import (
    DuplicateRegistrationError,
    EndpointUnavailableError,
    ResourceNotFoundError,
)
from weaktrack.tracking.facade import TrackerManagement

__all__ = ["DEFAULT_OBJECT_NAME", "ManagementEndpoint"]

logger = get_logger(__name__)


class ManagementEndpoint:
    """Publishes management objects for the HTTP management routes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._resources: dict[str, TrackerManagement] = {}
        self._closed = False

    def register(self, name: str, resource: TrackerManagement) -> None:
        """Publish ``resource`` under ``name``.

        Raises ``DuplicateRegistrationError`` if the name is taken and
        ``EndpointUnavailableError`` after ``close()``.
        """

        if not isinstance(resource, TrackerManagement):
            raise TypeError(f"{type(resource).__name__} does not implement the management contract")
        with self._lock:
            if self._closed:
                raise EndpointUnavailableError("Management endpoint is closed")
            if name in self._resources:
                raise DuplicateRegistrationError(name)
            self._resources[name] = resource
        logger.info("endpoint.registered", extra={"object_name": name})

    def lookup(self, name: str) -> TrackerManagement:
        with self._lock:
            resource = self._resources.get(name)
        if resource is None:
            raise ResourceNotFoundError(name)
        return resource

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._resources)

    def close(self) -> None:
        """Stop accepting registrations; published objects stay reachable."""

        with self._lock:
            self._closed = True
