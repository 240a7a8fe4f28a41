import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..app_logger import get_logger

log = get_logger("http")

#printable documents carry inline styles and a window.print() call
DOCUMENT_CSP = "default-src 'self'; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline'"
API_CSP = "default-src 'self'"

#Logs every request and adds security headers.
class SecurityMiddleware(BaseHTTPMiddleware):
    """Request logging and basic response hardening."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        log.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms
        )

        # Security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        if response.headers.get("content-type", "").startswith("text/html"):
            response.headers["Content-Security-Policy"] = DOCUMENT_CSP
        else:
            response.headers["Content-Security-Policy"] = API_CSP

        return response
