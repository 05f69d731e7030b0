"""HTTP middleware: access logging, security headers and rate limiting."""

from __future__ import annotations

import time
from typing import Awaitable, Callable, Iterable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .rate_limiter import FixedWindowRateLimiter

CallNext = Callable[[Request], Awaitable[Response]]

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


def client_address(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return request.client.host


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Write one log line per request with status and latency."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            '{} "{} {}" {} {:.1f}ms',
            client_address(request),
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach conservative security headers unless a route already set them."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply a global limiter to ``/api/`` and a stricter one to model routes.

    ``strict_routes`` holds ``(method, path)`` pairs that consume from both
    limiters.
    """

    def __init__(
        self,
        app: ASGIApp,
        api_limiter: FixedWindowRateLimiter,
        strict_limiter: FixedWindowRateLimiter,
        strict_routes: Iterable[tuple[str, str]],
        prefix: str = "/api/",
    ) -> None:
        super().__init__(app)
        self.api_limiter = api_limiter
        self.strict_limiter = strict_limiter
        self.strict_routes = {(method.upper(), path.rstrip("/")) for method, path in strict_routes}
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        path = request.url.path
        if not path.startswith(self.prefix) or request.method == "OPTIONS":
            return await call_next(request)

        key = client_address(request)
        limiters = [self.api_limiter]
        if (request.method, path.rstrip("/")) in self.strict_routes:
            limiters.append(self.strict_limiter)

        for limiter in limiters:
            decision = limiter.hit(key)
            if not decision.allowed:
                logger.warning("Rate limit exceeded for {} on {} {}", key, request.method, path)
                return JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={"error": limiter.message},
                    headers={"Retry-After": str(decision.retry_after)},
                )
        return await call_next(request)
