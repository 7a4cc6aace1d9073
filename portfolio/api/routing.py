# === portfolio/api/routing.py ===
import time
from typing import Callable

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute


def status_for(exc: Exception) -> int:
    if isinstance(exc, RequestValidationError):
        return 400
    return getattr(exc, "status_code", None) or 500


def route_template(request: Request, path_format: str) -> str:
    # an included route may only know its own part of the path, the router
    # prefix is whatever the URL carries in front of that part
    depth = path_format.count("/")
    if not depth:
        return request.url.path.rstrip("/") + path_format
    segments = request.url.path.split("/")
    return "/".join(segments[: len(segments) - depth]) + path_format


class InstrumentedRoute(APIRoute):
    """
    Route class that times its handler and reports to app.state.metrics.

    The label is the path template (/api/projects/{project_id}), never the
    raw URL, so label cardinality stays bounded.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def instrumented_handler(request: Request) -> Response:
            metrics = request.app.state.metrics
            route = route_template(request, self.path_format)
            method = request.method
            start_time = time.perf_counter()
            try:
                response = await handler(request)
            except Exception as exc:
                duration = time.perf_counter() - start_time
                status_code = status_for(exc)
                metrics.record_http_request(method, route, status_code, duration)
                metrics.record_http_error(method, route, status_code, type(exc).__name__)
                raise

            duration = time.perf_counter() - start_time
            metrics.record_http_request(method, route, response.status_code, duration)
            return response

        return instrumented_handler
