import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def add_security_headers(app):
    @app.middleware("http")
    async def security_headers_mw(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        # responses to authenticated requests carry product tokens / data
        if "authorization" in request.headers:
            response.headers["Cache-Control"] = "no-store"
        logger.debug(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, (time.perf_counter() - started) * 1000,
        )
        return response
