"""Exceptions raised by the tracking subsystem."""

from __future__ import annotations


class RegistrationError(RuntimeError):
    """Raised when a management object cannot be registered on the endpoint."""


class DuplicateRegistrationError(RegistrationError):
    """Raised when the requested name is already taken on the endpoint."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Management object already registered under '{name}'")
        self.name = name


class EndpointUnavailableError(RegistrationError):
    """Raised when the endpoint no longer accepts registrations."""


class RegistrationFailedError(RegistrationError):
    """Raised by the registrar task once it has given up publishing."""


class AlreadyPublishedError(RuntimeError):
    """Raised when a facade handle is published a second time."""


class ResourceNotFoundError(LookupError):
    """Raised when no management object is registered under a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No management object registered under '{name}'")
        self.name = name
