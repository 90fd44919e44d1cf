"""
Scancodes — Access Log Middleware
==================================

What:  One access line per request, with the scan outcome for POST /scan.
How:   Times the downstream call, then logs at a level chosen by status code.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

/scan answers 200 for every outcome, so the status code alone says nothing
about whether a code was read. The X-Scan-Status header set by the route is
copied into the line (and into ``extra["scan_status"]``) so failed scans can
be counted from the access log. Uploaded images are never logged.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scancodes.middleware.request_id import request_id_var

logger = logging.getLogger("scancodes.access")

SCAN_STATUS_HEADER = "X-Scan-Status"
QUIET_PATHS = frozenset({"/health"})


def access_level(status: int, scan_status: Optional[str]) -> int:
    """Log level for an access line: 5xx ERROR, 4xx or a failed scan WARNING, else INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if scan_status == "error":
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the code, template and scan endpoints."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "unknown"
        scan_status = response.headers.get(SCAN_STATUS_HEADER)
        outcome = f" scan={scan_status}" if scan_status else ""

        logger.log(
            access_level(response.status_code, scan_status),
            "%s %s -> %d%s in %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            outcome,
            elapsed_ms,
            request_id_var.get(""),
            client,
            extra={
                "request_id": request_id_var.get(""),
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "scan_status": scan_status,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client,
            },
        )
        return response
