"""Management routes exposing published trackers over HTTP."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from weaktrack.tracking import reporter
from weaktrack.tracking.endpoint import ManagementEndpoint
from weaktrack.tracking.errors import ResourceNotFoundError
from weaktrack.tracking.facade import TrackerManagement
from weaktrack.tracking.reporter import ReportOrder
from weaktrack.tracking.schemas import DumpReport, EnabledUpdate, IntervalUpdate, TrackerAttributes

router = APIRouter()


def get_management_endpoint(request: Request) -> ManagementEndpoint:
    endpoint: ManagementEndpoint | None = getattr(request.app.state, "management_endpoint", None)
    if endpoint is None:
        raise RuntimeError("Management endpoint not configured on application state")
    return endpoint


def get_managed_object(name: str, endpoint: ManagementEndpoint = Depends(get_management_endpoint)) -> TrackerManagement:
    try:
        return endpoint.lookup(name)
    except ResourceNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _attributes(resource: TrackerManagement) -> dict[str, object]:
    attributes = TrackerAttributes(
        enabled=resource.is_enabled(),
        stackdump_interval=resource.get_stackdump_interval(),
    )
    return attributes.model_dump(mode="json")


@router.get("/")
async def list_managed_objects(endpoint: ManagementEndpoint = Depends(get_management_endpoint)) -> JSONResponse:
    return JSONResponse({"ok": True, "data": {"names": endpoint.names()}})


@router.get("/{name}")
async def get_attributes(resource: TrackerManagement = Depends(get_managed_object)) -> JSONResponse:
    return JSONResponse({"ok": True, "data": _attributes(resource)})


@router.put("/{name}/enabled")
async def set_enabled(payload: EnabledUpdate, resource: TrackerManagement = Depends(get_managed_object)) -> JSONResponse:
    resource.set_enabled(payload.value)
    return JSONResponse({"ok": True, "data": _attributes(resource)})


@router.put("/{name}/stackdump-interval")
async def set_stackdump_interval(
    payload: IntervalUpdate,
    resource: TrackerManagement = Depends(get_managed_object),
) -> JSONResponse:
    """Update the sampling interval; non-positive values are stored as 1."""

    resource.set_stackdump_interval(payload.value)
    return JSONResponse({"ok": True, "data": _attributes(resource)})


@router.post("/{name}/toggle-enabled")
async def toggle_enabled(resource: TrackerManagement = Depends(get_managed_object)) -> JSONResponse:
    enabled = resource.toggle_enabled()
    return JSONResponse({"ok": True, "data": {"enabled": enabled}})


@router.post("/{name}/reset")
async def reset_counts(resource: TrackerManagement = Depends(get_managed_object)) -> JSONResponse:
    resource.reset()
    return JSONResponse({"ok": True, "data": _attributes(resource)})


@router.get("/{name}/dump")
async def dump_counts(
    order: ReportOrder = Query(default="name"),
    resource: TrackerManagement = Depends(get_managed_object),
) -> JSONResponse:
    """Return the text report and, for live trackers, the entries behind it."""

    counts = getattr(resource, "counts", None)
    if callable(counts):
        entries = reporter.sort_entries(counts(), order)
        text = reporter.format_lines(entries, order)
    else:
        entries = []
        text = resource.dump_by_count() if order == "count" else resource.dump_by_name()
    report = DumpReport(order=order, text=text, entries=entries)
    return JSONResponse({"ok": True, "data": report.model_dump(mode="json")})
