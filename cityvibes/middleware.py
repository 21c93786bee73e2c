"""FastAPI middleware for Prometheus metrics instrumentation."""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cityvibes.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUEST_SIZE_BYTES,
    HTTP_RESPONSE_SIZE_BYTES,
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics for Prometheus."""

    EXCLUDE_PATHS = {"/metrics", "/health", "/ping"}

    # Label used for paths no route matched (404s, scanners)
    UNMATCHED_ENDPOINT = "unmatched"

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and collect metrics."""
        path = request.url.path
        method = request.method

        if path in self.EXCLUDE_PATHS:
            return await call_next(request)

        # The matched route is only known after routing, so in-progress and
        # request size are tracked against the raw path prefix
        prefix = self._path_prefix(path)

        content_length = request.headers.get("content-length")
        if content_length:
            try:
                HTTP_REQUEST_SIZE_BYTES.labels(
                    method=method, endpoint=prefix
                ).observe(int(content_length))
            except ValueError:
                pass

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=prefix).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.perf_counter() - start_time
            endpoint = self._route_template(request)
            HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method, endpoint=endpoint
            ).observe(duration)
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=prefix).dec()
            HTTP_REQUESTS_TOTAL.labels(
                method=method, endpoint=endpoint, status_code=str(status_code)
            ).inc()

        response_size = response.headers.get("content-length")
        if response_size:
            try:
                HTTP_RESPONSE_SIZE_BYTES.labels(
                    method=method, endpoint=self._route_template(request)
                ).observe(int(response_size))
            except ValueError:
                pass

        return response

    def _route_template(self, request: Request) -> str:
        """Return the matched route template (e.g. /v1/rank) to keep label cardinality low."""
        route = request.scope.get("route")
        template = getattr(route, "path", None)
        return template or self.UNMATCHED_ENDPOINT

    def _path_prefix(self, path: str) -> str:
        """Reduce a raw path to its first two segments (/v1/rank, /debug/cache)."""
        segments = [s for s in path.strip("/").split("/") if s]
        return "/" + "/".join(segments[:2]) if segments else "/"
