"""
Notes API: Rate Limiting Middleware
====================================

What:  Per-IP sliding window rate limiter.
How:   Each client IP maps to a deque of request timestamps. On every
       request, timestamps older than the window are dropped; if the number
       left has reached the limit the request is answered with 429 and a
       Retry-After header, otherwise the timestamp is recorded and the
       request goes through. Clients with no hits left in the window are
       swept out at most once per window length.

State is held in process memory, so limits apply per worker process.
"""

import logging
import threading
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

# Health checks and API docs are always reachable
DEFAULT_EXEMPT_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args:
        max_requests: Requests allowed per client within one window
        window_seconds: Window length in seconds
        exempt_paths: Paths that are never counted or limited
        clock: Time source in seconds; defaults to time.monotonic
    """

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int,
        window_seconds: int,
        exempt_paths: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.exempt_paths = frozenset(exempt_paths or DEFAULT_EXEMPT_PATHS)
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = clock()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        retry_after = self._register_hit(client_ip)
        if retry_after is not None:
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                self.max_requests,
                self.window_seconds,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many requests. Please wait {retry_after} seconds before retrying.",
                    "request_id": request_id_var.get(),
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _register_hit(self, client_ip: str) -> Optional[int]:
        """
        Record a request for `client_ip` if it is within the limit.

        Returns:
            None when the request is allowed, otherwise the number of seconds
            until the oldest hit leaves the window.
        """
        now = self._clock()
        window_start = now - self.window_seconds

        with self._lock:
            hits = self._hits[client_ip]
            while hits and hits[0] <= window_start:
                hits.popleft()

            if len(hits) >= self.max_requests:
                return int(hits[0] + self.window_seconds - now) + 1

            hits.append(now)
            if now - self._last_sweep >= self.window_seconds:
                self._forget_idle_clients(window_start)
                self._last_sweep = now
            return None

    def _forget_idle_clients(self, window_start: float) -> None:
        """
        Drop IPs whose newest hit is already outside the window.

        Runs at most once per window length, under the caller's lock.
        """
        idle = [ip for ip, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for ip in idle:
            del self._hits[ip]
        if idle:
            logger.debug("Cleaned up %d inactive IP entries", len(idle))
