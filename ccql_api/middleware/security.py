"""
Response hardening and request tracing for the ccql API.
"""

import time
import uuid
from typing import Callable, Dict

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ccql.logging_config import get_logger
from ccql.settings import get_settings

logger = get_logger("api.middleware")

SECURITY_HEADERS: Dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}
HSTS_HEADER = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach SECURITY_HEADERS (plus HSTS in production) to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if get_settings().is_production:
            response.headers["Strict-Transport-Security"] = HSTS_HEADER
        return response


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Tag responses with X-Request-ID and X-Response-Time.

    A caller-supplied X-Request-ID is echoed back. Probe traffic under
    /api/health is not logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

        if not request.url.path.startswith("/api/health"):
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} "
                f"{response.status_code} {elapsed_ms:.1f}ms"
            )
        return response


def setup_security(app: FastAPI) -> None:
    """Install the middleware; call after CORSMiddleware has been added."""
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestTracingMiddleware)
