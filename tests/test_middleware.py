"""
Notes API: Middleware Tests
============================

What:  Request id propagation, access logging and rate limiting.
"""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from notes_api.config import Settings
from notes_api.main import create_app
from notes_api.middleware.logging import level_for_status
from notes_api.middleware.rate_limit import RateLimitMiddleware


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/notes")

        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/notes/1", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"


class TestRequestLogging:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (307, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_request_is_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notes_api.access"):
            await test_client.get("/notes")

        messages = [record.getMessage() for record in caplog.records if record.name == "notes_api.access"]
        assert any(message.startswith("GET /notes 200") for message in messages)


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_requests_over_limit_get_429(self, store):
        app = create_app(
            settings=Settings(rate_limit_enabled=True, rate_limit_requests=3, rate_limit_window=60),
            store=store,
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = [(await client.get("/notes")).status_code for _ in range(3)]
            blocked = await client.get("/notes")
            health = await client.get("/health")

        assert statuses == [200, 200, 200]
        assert blocked.status_code == 429
        assert blocked.json()["error"] == "rate_limit_exceeded"
        assert 1 <= int(blocked.headers["Retry-After"]) <= 61
        assert health.status_code == 200

    def test_window_slides(self):
        now = [1000.0]
        limiter = RateLimitMiddleware(
            app=None, max_requests=2, window_seconds=10, clock=lambda: now[0]
        )

        assert limiter._register_hit("1.2.3.4") is None
        now[0] += 5
        assert limiter._register_hit("1.2.3.4") is None
        assert limiter._register_hit("1.2.3.4") == 6

        now[0] += 6  # first hit has left the window
        assert limiter._register_hit("1.2.3.4") is None

    def test_limits_are_per_client(self):
        limiter = RateLimitMiddleware(app=None, max_requests=1, window_seconds=10, clock=lambda: 0.0)

        assert limiter._register_hit("10.0.0.1") is None
        assert limiter._register_hit("10.0.0.2") is None
        assert limiter._register_hit("10.0.0.1") is not None

    @pytest.mark.asyncio
    async def test_rejected_request_keeps_request_id_and_access_line(self, store, caplog):
        app = create_app(
            settings=Settings(rate_limit_enabled=True, rate_limit_requests=1, rate_limit_window=60),
            store=store,
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/notes")
            with caplog.at_level(logging.INFO, logger="notes_api.access"):
                blocked = await client.get("/notes", headers={"X-Request-ID": "trace-429"})

        assert blocked.status_code == 429
        assert blocked.headers["X-Request-ID"] == "trace-429"
        assert blocked.json()["request_id"] == "trace-429"
        messages = [record.getMessage() for record in caplog.records if record.name == "notes_api.access"]
        assert any(message.startswith("GET /notes 429") for message in messages)

    def test_idle_clients_swept_once_per_window(self):
        now = [1000.0]
        limiter = RateLimitMiddleware(
            app=None, max_requests=5, window_seconds=10, clock=lambda: now[0]
        )

        limiter._register_hit("10.0.0.1")
        now[0] = 1005.0
        limiter._register_hit("10.0.0.2")
        assert "10.0.0.1" in limiter._hits

        now[0] = 1011.0
        limiter._register_hit("10.0.0.2")
        assert "10.0.0.1" not in limiter._hits
        assert list(limiter._hits["10.0.0.2"]) == [1005.0, 1011.0]
