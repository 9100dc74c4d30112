"""
Rate limiting middleware for API endpoints
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Callable, Iterable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware


EXEMPT_PATHS = frozenset({"/", "/health", "/ready", "/docs", "/openapi.json"})


class SlidingWindow:
    """Request timestamps per client within the last ``window_seconds``"""

    def __init__(self, limit: int, window_seconds: int, cleanup_interval: int = 300) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: dict[str, list[float]] = defaultdict(list)
        self._cleanup_interval = cleanup_interval
        self._last_cleanup = time.time()

    def _cleanup(self, now: float) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return
        cutoff = now - self.window_seconds
        for key in list(self._hits):
            self._hits[key] = [t for t in self._hits[key] if t > cutoff]
            if not self._hits[key]:
                del self._hits[key]
        self._last_cleanup = now

    def hit(self, key: str, now: float) -> int | None:
        """
        Record a request

        Returns:
            Remaining requests in the window, or None if the limit is exceeded
        """
        self._cleanup(now)
        hits = self._hits[key]
        hits[:] = [t for t in hits if t > now - self.window_seconds]
        if len(hits) >= self.limit:
            return None
        hits.append(now)
        return self.limit - len(hits)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Simple in-memory rate limiting middleware

    Note: counters are per process; page sessions are in-memory too, so the
    service runs as a single instance anyway.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 100,
        window_seconds: int = 60,
        exempt_paths: Iterable[str] = EXEMPT_PATHS,
    ):
        super().__init__(app)
        self.window = SlidingWindow(requests_per_window, window_seconds)
        self.exempt_paths = frozenset(exempt_paths)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, honouring proxy headers"""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    def _headers(self, remaining: int, now: float) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.window.limit),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(int(now + self.window.window_seconds)),
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Check rate limit before processing request"""
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        now = time.time()
        remaining = self.window.hit(self._get_client_ip(request), now)

        if remaining is None:
            return Response(
                content='{"detail": "Rate limit exceeded. Please try again later."}',
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
                headers={"Retry-After": str(self.window.window_seconds), **self._headers(0, now)},
            )

        response = await call_next(request)
        response.headers.update(self._headers(remaining, now))
        return response
