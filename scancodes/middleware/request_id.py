"""
Scancodes — Request ID Middleware
==================================

What:  Gives each request a correlation ID and returns it in X-Request-ID.
How:   Keeps a well-formed client-supplied X-Request-ID, otherwise generates a
       short one. The ID goes into a ContextVar (loggers, exception handlers)
       and onto request.state (route handlers).

A client ID is echoed into log lines, so it must be short and printable;
anything else is replaced rather than trusted.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_request_id(supplied: Optional[str]) -> str:
    """The client's ID when it is safe to log, else a fresh one."""
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
