# === portfolio/services/metrics.py ===
import asyncio
import time
import logging
from typing import Optional, Set

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

logger = logging.getLogger(__name__)

DURATION_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 2.5, 5, 10)
# distinct page labels kept before new pages are folded into OTHER_PAGE
MAX_PAGE_LABELS = 100
OTHER_PAGE = "other"


class MetricsCollector:
    """
    Owns one prometheus registry for the lifetime of the process.

    Metric families are registered lazily on first use and only once.
    Components receive this object explicitly, nothing looks it up globally.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, version: str = "1.0.0", environment: str = "development"):
        self.version = version
        self.environment = environment
        self.start_time = time.time()
        self.registry: Optional[CollectorRegistry] = None
        self.seen_pages: Set[str] = set()

    def _ensure_initialized(self) -> CollectorRegistry:
        if self.registry is not None:
            return self.registry

        registry = CollectorRegistry()

        #process level defaults: cpu, memory, fds, gc, python info
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)

        self.http_requests = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status_code"],
            registry=registry,
        )
        self.http_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "route", "status_code"],
            buckets=DURATION_BUCKETS,
            registry=registry,
        )
        self.http_errors = Counter(
            "http_errors_total",
            "Total number of HTTP requests that raised an error",
            ["method", "route", "status_code", "error_type"],
            registry=registry,
        )
        self.db_queries = Counter(
            "db_queries_total",
            "Total number of database queries",
            ["operation", "table"],
            registry=registry,
        )
        self.db_duration = Histogram(
            "db_query_duration_seconds",
            "Duration of database queries in seconds",
            ["operation", "table"],
            buckets=DURATION_BUCKETS,
            registry=registry,
        )
        self.db_errors = Counter(
            "db_errors_total",
            "Total number of failed database queries",
            ["operation", "error_type"],
            registry=registry,
        )
        self.api_calls = Counter(
            "api_calls_total",
            "Total number of outbound API calls",
            ["endpoint", "method", "status_code"],
            registry=registry,
        )
        self.api_duration = Histogram(
            "api_call_duration_seconds",
            "Duration of outbound API calls in seconds",
            ["endpoint", "method"],
            buckets=DURATION_BUCKETS,
            registry=registry,
        )
        self.page_views = Counter(
            "page_views_total",
            "Total number of page views reported by the frontend",
            ["page", "method"],
            registry=registry,
        )

        info = Gauge(
            "backend_info",
            "Backend application information",
            ["version", "environment"],
            registry=registry,
        )
        info.labels(version=self.version, environment=self.environment).set(1)

        uptime = Gauge("backend_uptime_seconds", "Application uptime in seconds", registry=registry)
        uptime.set_function(lambda: time.time() - self.start_time)

        self.event_loop_lag = Gauge(
            "event_loop_lag_seconds",
            "Delay before the event loop ran a task scheduled at scrape time",
            registry=registry,
        )

        self.registry = registry
        logger.info("Metrics registry initialized")
        return registry

    def record_http_request(self, method: str, route: str, status_code: int, duration_seconds: float):
        self._ensure_initialized()
        labels = {"method": method, "route": route, "status_code": str(status_code)}
        self.http_requests.labels(**labels).inc()
        self.http_duration.labels(**labels).observe(duration_seconds)

    def record_http_error(self, method: str, route: str, status_code: int, error_type: str):
        self._ensure_initialized()
        self.http_errors.labels(
            method=method, route=route, status_code=str(status_code), error_type=error_type
        ).inc()

    def record_db_query(self, operation: str, table: str, duration_seconds: float):
        self._ensure_initialized()
        self.db_queries.labels(operation=operation, table=table).inc()
        self.db_duration.labels(operation=operation, table=table).observe(duration_seconds)

    def record_db_error(self, operation: str, error_type: str):
        self._ensure_initialized()
        self.db_errors.labels(operation=operation, error_type=error_type).inc()

    def record_api_call(self, endpoint: str, method: str, status_code: int, duration_seconds: float):
        # status_code 0 means the call never got a response
        self._ensure_initialized()
        self.api_calls.labels(endpoint=endpoint, method=method, status_code=str(status_code)).inc()
        self.api_duration.labels(endpoint=endpoint, method=method).observe(duration_seconds)

    def record_page_view(self, page: str, method: str = "GET"):
        self._ensure_initialized()
        if page not in self.seen_pages:
            if len(self.seen_pages) >= MAX_PAGE_LABELS:
                page = OTHER_PAGE
            else:
                self.seen_pages.add(page)
        self.page_views.labels(page=page, method=method).inc()

    async def sample_event_loop_lag(self) -> float:
        """Measures how long a zero-delay callback waits for the running loop."""
        self._ensure_initialized()
        loop = asyncio.get_running_loop()
        start = loop.time()
        await asyncio.sleep(0)
        lag = max(loop.time() - start, 0.0)
        self.event_loop_lag.set(lag)
        return lag

    def sample(self, name: str, labels: Optional[dict] = None) -> Optional[float]:
        return self._ensure_initialized().get_sample_value(name, labels or {})

    def render(self) -> bytes:
        return generate_latest(self._ensure_initialized())
