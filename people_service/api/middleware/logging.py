"""Request/response logging middleware."""

from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from people_service.utils.monitoring import observe_request

logger = logging.getLogger("people_service.api")

# Shared label for requests no route claimed (404s, static files).
UNMATCHED_ROUTE = "<unmatched>"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every inbound HTTP request and record its metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        # Label metrics by route template so ids don't explode cardinality.
        route = request.scope.get("route")
        path = getattr(route, "path", None) or UNMATCHED_ROUTE
        observe_request(request.method, path, response.status_code, duration)

        logger.info(
            "request.completed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": round(duration * 1000, 2),
                "client": request.client.host if request.client else None,
            },
        )

        return response
