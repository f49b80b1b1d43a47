"""
Notes API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── clock: Deterministic UTC clock, one second per call
    ├── store: Empty NoteStore driven by `clock`
    ├── frozen_store: Empty NoteStore whose clock never advances
    ├── note_service: NoteService over `store`
    ├── test_settings: Settings with rate limiting off
    ├── app: FastAPI app built by create_app() around `store`
    └── test_client: HTTPX AsyncClient talking to `app`
"""

import os
from datetime import datetime, timedelta, timezone

# Applied before any notes_api import reads the environment
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notes_api.config import Settings
from notes_api.main import create_app
from notes_api.services.note_service import NoteService
from notes_api.store import NoteStore


class TickingClock:
    """Returns a strictly increasing UTC time, `step` apart on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


class FrozenClock:
    """Returns the same UTC time on every call."""

    def __init__(self, at: datetime):
        self.at = at

    def __call__(self) -> datetime:
        return self.at


START = datetime(2026, 10, 18, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return TickingClock(START)


@pytest.fixture
def store(clock):
    return NoteStore(clock=clock)


@pytest.fixture
def frozen_store():
    """Store whose notes all share one creation timestamp."""
    return NoteStore(clock=FrozenClock(START))


@pytest.fixture
def note_service(store):
    return NoteService(store)


@pytest.fixture
def test_settings():
    return Settings(rate_limit_enabled=False, log_level="WARNING")


@pytest.fixture
def app(test_settings, store):
    return create_app(settings=test_settings, store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
