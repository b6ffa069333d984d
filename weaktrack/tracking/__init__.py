"""Weak reference allocation tracking, sampling and management."""

from weaktrack.tracking.endpoint import ManagementEndpoint
from weaktrack.tracking.facade import ManagedTracker, TrackerManagement
from weaktrack.tracking.hook import FacadeHandle, bind_weakref_type, record_construction
from weaktrack.tracking.registrar import Registrar, RegistrarState
from weaktrack.tracking.routes import router
from weaktrack.tracking.service import TrackingService, get_tracking_service

__all__ = [
    "FacadeHandle",
    "ManagedTracker",
    "ManagementEndpoint",
    "Registrar",
    "RegistrarState",
    "TrackerManagement",
    "TrackingService",
    "bind_weakref_type",
    "get_tracking_service",
    "record_construction",
    "router",
]
