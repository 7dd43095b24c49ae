"""
Prometheus metrics middleware for HTTP request tracking.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import HEALTH_PATH, METRICS_PATH
from ..monitoring.prometheus_metrics import prometheus_metrics


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in (METRICS_PATH, HEALTH_PATH):
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        # Label by route template (/api/v1/bookings/{booking_id}) to keep ULIDs out of labels
        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or "unmatched"
        prometheus_metrics.record_http_request(
            method=request.method, endpoint=endpoint, duration=duration, status_code=response.status_code
        )
        return response
