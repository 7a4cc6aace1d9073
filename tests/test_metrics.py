# =============================================================================
# tests/test_metrics.py - Metrics Collector Tests
# =============================================================================
# Unit tests for MetricsCollector plus the route instrumentation that feeds it.
# =============================================================================

import asyncio
import uuid
from types import SimpleNamespace

from portfolio.api.routing import route_template
from portfolio.services.metrics import MAX_PAGE_LABELS, OTHER_PAGE, MetricsCollector

PROJECTS_ROUTE = "/api/projects"
PROJECT_ROUTE = "/api/projects/{project_id}"


class TestMetricsCollector:
    """Tests for the collector on its own."""

    def test_registry_is_created_once(self):
        collector = MetricsCollector()
        assert collector.registry is None

        collector.record_page_view("/")
        first = collector.registry
        collector.record_page_view("/about")

        assert first is not None
        assert collector.registry is first

    def test_collectors_do_not_share_state(self):
        a = MetricsCollector()
        b = MetricsCollector()

        a.record_http_request("GET", "/x", 200, 0.01)

        assert a.sample("http_requests_total", {"method": "GET", "route": "/x", "status_code": "200"}) == 1
        assert b.sample("http_requests_total", {"method": "GET", "route": "/x", "status_code": "200"}) is None

    def test_http_request_counter_and_histogram(self):
        collector = MetricsCollector()
        labels = {"method": "GET", "route": "/api/projects", "status_code": "200"}

        for _ in range(3):
            collector.record_http_request("GET", "/api/projects", 200, 0.2)

        assert collector.sample("http_requests_total", labels) == 3
        assert collector.sample("http_request_duration_seconds_count", labels) == 3
        assert abs(collector.sample("http_request_duration_seconds_sum", labels) - 0.6) < 1e-9

    def test_db_and_api_call_metrics(self):
        collector = MetricsCollector()

        collector.record_db_query("select", "projects", 0.003)
        collector.record_db_error("select", "OperationalError")
        collector.record_api_call("/emails", "POST", 0, 1.5)

        assert collector.sample("db_queries_total", {"operation": "select", "table": "projects"}) == 1
        assert collector.sample("db_errors_total", {"operation": "select", "error_type": "OperationalError"}) == 1
        assert collector.sample("api_calls_total", {"endpoint": "/emails", "method": "POST", "status_code": "0"}) == 1
        assert collector.sample("api_call_duration_seconds_count", {"endpoint": "/emails", "method": "POST"}) == 1

    def test_render_exposition_format(self):
        collector = MetricsCollector(version="2.0.0", environment="staging")
        collector.record_http_error("GET", "/api/projects/{project_id}", 404, "NotFoundError")

        text = collector.render().decode()

        assert "# TYPE http_errors_total counter" in text
        assert 'error_type="NotFoundError"' in text
        assert "# TYPE backend_info gauge" in text
        assert collector.sample("backend_info", {"version": "2.0.0", "environment": "staging"}) == 1
        assert "backend_uptime_seconds" in text
        assert "python_info" in text


class TestRouteInstrumentation:
    """Requests through the app are recorded under their route template."""

    def test_counts_requests_per_route(self, client, metrics):
        for _ in range(4):
            assert client.get(PROJECTS_ROUTE).status_code == 200

        labels = {"method": "GET", "route": PROJECTS_ROUTE, "status_code": "200"}
        assert metrics.sample("http_requests_total", labels) == 4

    def test_uses_template_not_raw_url(self, client, metrics):
        created = client.post(PROJECTS_ROUTE, json={"title": "X", "description": "Y"}).json()

        client.get(f"/api/projects/{created['id']}")

        labels = {"method": "GET", "route": PROJECT_ROUTE, "status_code": "200"}
        assert metrics.sample("http_requests_total", labels) == 1
        assert metrics.sample(
            "http_requests_total",
            {"method": "GET", "route": f"/api/projects/{created['id']}", "status_code": "200"},
        ) is None

    def test_created_status_recorded(self, client, metrics):
        client.post(PROJECTS_ROUTE, json={"title": "X", "description": "Y"})

        labels = {"method": "POST", "route": PROJECTS_ROUTE, "status_code": "201"}
        assert metrics.sample("http_requests_total", labels) == 1

    def test_failing_request_records_error_once(self, client, metrics):
        response = client.get(f"/api/projects/{uuid.uuid4()}")
        assert response.status_code == 404

        error_labels = {
            "method": "GET",
            "route": PROJECT_ROUTE,
            "status_code": "404",
            "error_type": "NotFoundError",
        }
        assert metrics.sample("http_errors_total", error_labels) == 1
        assert metrics.sample(
            "http_requests_total", {"method": "GET", "route": PROJECT_ROUTE, "status_code": "404"}
        ) == 1

    def test_validation_failure_recorded_as_400(self, client, metrics):
        client.post(PROJECTS_ROUTE, json={})

        labels = {
            "method": "POST",
            "route": PROJECTS_ROUTE,
            "status_code": "400",
            "error_type": "ValidationError",
        }
        assert metrics.sample("http_errors_total", labels) == 1

    def test_routes_with_same_relative_path_kept_apart(self, client, metrics):
        client.get(PROJECTS_ROUTE)
        client.post("/api/contact", json={})

        assert metrics.sample(
            "http_requests_total", {"method": "GET", "route": PROJECTS_ROUTE, "status_code": "200"}
        ) == 1
        assert metrics.sample(
            "http_requests_total", {"method": "POST", "route": "/api/contact", "status_code": "400"}
        ) == 1
        assert metrics.sample(
            "http_requests_total", {"method": "GET", "route": "", "status_code": "200"}
        ) is None

    def test_db_queries_recorded(self, client, metrics):
        client.get(PROJECTS_ROUTE)

        assert metrics.sample("db_queries_total", {"operation": "select", "table": "projects"}) == 1

    def test_scrape_is_not_measured(self, client, metrics):
        client.get("/api/metrics")
        response = client.get("/api/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'route="/api/metrics"' not in response.text


class TestPageViews:
    """POST /api/metrics/page-view"""

    def test_records_page_view(self, client, metrics):
        response = client.post("/api/metrics/page-view", json={"page": "/projects"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert metrics.sample("page_views_total", {"page": "/projects", "method": "GET"}) == 1

    def test_rejects_non_string_page(self, client, metrics):
        response = client.post("/api/metrics/page-view", json={"page": 42})

        assert response.status_code == 400
        assert metrics.sample("page_views_total", {"page": "42", "method": "GET"}) is None

    def test_rejects_oversized_page(self, client, metrics):
        response = client.post("/api/metrics/page-view", json={"page": "/" + "x" * 300})

        assert response.status_code == 400

    def test_rejects_unknown_method(self, client, metrics):
        response = client.post("/api/metrics/page-view", json={"page": "/", "method": "BREW"})

        assert response.status_code == 400
        assert metrics.sample("page_views_total", {"page": "/", "method": "BREW"}) is None

    def test_distinct_pages_are_capped(self):
        collector = MetricsCollector()

        for i in range(MAX_PAGE_LABELS + 5):
            collector.record_page_view(f"/page/{i}")
        collector.record_page_view("/page/0")

        assert collector.sample("page_views_total", {"page": "/page/0", "method": "GET"}) == 2
        assert collector.sample("page_views_total", {"page": OTHER_PAGE, "method": "GET"}) == 5
        assert collector.sample("page_views_total", {"page": f"/page/{MAX_PAGE_LABELS}", "method": "GET"}) is None


class TestRouteTemplate:
    """route_template rebuilds the full template from the URL prefix."""

    def request(self, path):
        return SimpleNamespace(url=SimpleNamespace(path=path))

    def test_relative_templates_get_the_url_prefix(self):
        assert route_template(self.request("/api/projects"), "") == "/api/projects"
        assert route_template(self.request("/api/contact"), "") == "/api/contact"
        assert route_template(self.request("/api/projects/abc"), "/{project_id}") == PROJECT_ROUTE

    def test_full_templates_are_kept(self):
        assert route_template(self.request("/api/projects/abc"), PROJECT_ROUTE) == PROJECT_ROUTE
        assert route_template(self.request("/api/projects"), PROJECTS_ROUTE) == PROJECTS_ROUTE


class TestEventLoopLag:
    """event_loop_lag_seconds is sampled when the registry is scraped."""

    def test_sample_sets_gauge(self):
        collector = MetricsCollector()

        lag = asyncio.run(collector.sample_event_loop_lag())

        assert lag >= 0
        assert collector.sample("event_loop_lag_seconds") == lag

    def test_scrape_exports_lag(self, client):
        text = client.get("/api/metrics").text

        assert "# TYPE event_loop_lag_seconds gauge" in text
        assert "event_loop_lag_seconds " in text
