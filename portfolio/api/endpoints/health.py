# === portfolio/api/endpoints/health.py ===
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.deps import get_health_reporter
from portfolio.api.routing import InstrumentedRoute
from portfolio.db.database import get_db
from portfolio.services.health import HealthReporter

router = APIRouter(route_class=InstrumentedRoute)

@router.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db),
    reporter: HealthReporter = Depends(get_health_reporter),
):
    report = await reporter.check(db)
    # load balancers only look at the status code
    status_code = 200 if report["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=report)
