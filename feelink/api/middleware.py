"""
API middleware
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..core.logging import get_logger

logger = get_logger("api.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One structured log event per request

    Text bodies and client addresses are never logged. The request id is
    echoed back in X-Request-ID so a client report can be matched to a log line.
    """

    # Polled by health probes
    QUIET_PATHS = frozenset({"/v1/health"})

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        fields = {"request_id": request_id, "route": f"{request.method} {request.url.path}"}

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request crashed",
                extra={**fields, "event_type": "request_error",
                       "duration_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{fields['route']} -> {response.status_code}",
            extra={**fields, "event_type": "request", "status_code": response.status_code,
                   "duration_ms": duration_ms},
        )
        response.headers["X-Request-ID"] = request_id
        return response
