"""
cep_weather.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Generate/propagate request IDs.
- Bind the caller's W3C trace id (if any) so gateway and downstream log lines
  of one logical request can be joined on it.
- Emit one access line per request; uvicorn's own access log is disabled.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import inbound_trace_id

log = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        # Empty when the caller sent no traceparent (gateway requests from end clients).
        caller_trace_id = inbound_trace_id(request.headers)
        if caller_trace_id:
            structlog.contextvars.bind_contextvars(caller_trace_id=caller_trace_id)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            if response.status_code >= 400:
                log.warning("request_failed", status=response.status_code, elapsed_ms=elapsed_ms)
            else:
                log.info("request_completed", status=response.status_code, elapsed_ms=elapsed_ms)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response
