# === portfolio/api/api.py ===
from fastapi import APIRouter
from .endpoints import projects, contact, health, metrics

api_router = APIRouter()
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(contact.router, prefix="/contact", tags=["Contact"])
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(metrics.router, tags=["Metrics"])
