"""FastAPI application exposing the weak reference tracker for management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from weaktrack.config import get_settings
from weaktrack.lib.logger import configure_logging, get_logger
from weaktrack.tracking import TrackingService, get_tracking_service, router as management_router

logger = get_logger(__name__)


def create_app(service: TrackingService | None = None) -> FastAPI:
    """Build the management application around ``service``.

    Defaults to the process-wide service. The lifespan schedules the registrar
    (a no-op when it already ran or is running) and raises its ready signal.
    """

    settings = get_settings()
    configure_logging(settings.log_level)
    if service is None:
        service = get_tracking_service()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        service.start()
        service.signal_ready()
        logger.info("app.startup", extra={"object_name": service.registrar.name})
        yield

    app = FastAPI(title="weaktrack", version="0.1.0", lifespan=lifespan)
    app.state.tracking = service
    app.state.management_endpoint = service.endpoint

    app.include_router(management_router, prefix="/management", tags=["management"])

    @app.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness plus the registrar state."""

        payload = {
            "ok": True,
            "data": {
                "status": "healthy",
                "registrar": service.state.value,
                "tracking": service.facade is not None,
            },
        }
        return JSONResponse(content=payload)

    return app


app = create_app()
