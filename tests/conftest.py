"""Pytest fixtures for weak reference tracker tests."""

from collections.abc import AsyncIterator, Iterator
import os

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("WEAKTRACK_REGISTRATION_DELAY_SECONDS", "0")
os.environ.setdefault("LOG_LEVEL", "INFO")

from weaktrack.config import Settings, get_settings
from weaktrack.main import create_app
from weaktrack.tracking import ManagedTracker, TrackingService, get_tracking_service

OBJECT_NAME = "weakref:type=WeakReference"


@pytest.fixture()
def stack_dumps() -> list[tuple[str, int]]:
    """Collect ``(type_key, count)`` pairs instead of logging stacks."""

    return []


@pytest.fixture()
def settings() -> Settings:
    return Settings(registration_delay_seconds=0.0, object_name=OBJECT_NAME)


@pytest.fixture()
def service(settings: Settings, stack_dumps: list[tuple[str, int]]) -> TrackingService:
    """Return a service whose registrar has not run yet."""

    return TrackingService(settings, dumper=lambda key, count: stack_dumps.append((key, count)))


@pytest.fixture()
def tracker(service: TrackingService) -> ManagedTracker:
    """Run registration synchronously and return the published tracker."""

    return service.registrar.run()


@pytest.fixture()
def app(service: TrackingService, tracker: ManagedTracker) -> FastAPI:
    return create_app(service)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` bound to the management app."""

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def process_service(monkeypatch: pytest.MonkeyPatch) -> Iterator[TrackingService]:
    """Return a fresh process-wide service; the caches are cleared around each use."""

    monkeypatch.setenv("WEAKTRACK_REGISTRATION_DELAY_SECONDS", "0")
    monkeypatch.setenv("WEAKTRACK_OBJECT_NAME", OBJECT_NAME)
    get_settings.cache_clear()
    get_tracking_service.cache_clear()
    yield get_tracking_service()
    get_tracking_service.cache_clear()
    get_settings.cache_clear()
