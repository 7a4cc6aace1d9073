# === portfolio/api/deps.py ===
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.config import Settings
from portfolio.db.database import get_db
from portfolio.services.contact import ContactService
from portfolio.services.health import HealthReporter
from portfolio.services.metrics import MetricsCollector
from portfolio.services.project_service import ProjectService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.metrics

def get_health_reporter(request: Request) -> HealthReporter:
    return request.app.state.health

def get_project_service(
    db: AsyncSession = Depends(get_db),
    metrics: MetricsCollector = Depends(get_metrics),
) -> ProjectService:
    return ProjectService(db, metrics)

def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact
