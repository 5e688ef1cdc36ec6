"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from gradebet.infrastructure.observability.metrics import request_duration_histogram

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """
    Route template of the request, e.g. /v1/users/{username}.

    Path parameters never reach the metric labels, so the series count stays
    bounded by the number of routes. Requests no route matched share one label.
    """
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ENDPOINT)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, reusing the caller's X-Request-ID if sent"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency per method, route template and status"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)

        # The router fills scope["route"] while handling the request
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint_label(request),
            status=response.status_code,
        ).observe(time.perf_counter() - started)

        return response
