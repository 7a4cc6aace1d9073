# === portfolio/api/endpoints/metrics.py ===
from fastapi import APIRouter, Depends, Response
from fastapi.routing import APIRoute

from portfolio.api.deps import get_metrics
from portfolio.api.routing import InstrumentedRoute
from portfolio.schemas.metrics import PageViewRequest
from portfolio.services.metrics import MetricsCollector

router = APIRouter(route_class=InstrumentedRoute)

async def scrape_metrics(metrics: MetricsCollector = Depends(get_metrics)):
    await metrics.sample_event_loop_lag()
    return Response(content=metrics.render(), media_type=metrics.content_type)

#the scrape route itself is never measured
router.add_api_route("/metrics", scrape_metrics, methods=["GET"], route_class_override=APIRoute)

@router.post("/metrics/page-view")
async def record_page_view(payload: PageViewRequest, metrics: MetricsCollector = Depends(get_metrics)):
    metrics.record_page_view(payload.page, payload.method or "GET")
    return {"success": True}
