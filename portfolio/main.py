# === portfolio/main.py ===
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
from portfolio.api.api import api_router
from portfolio.core.config import Settings, settings as default_settings
from portfolio.core.exceptions import (
    PortfolioError,
    portfolio_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from portfolio.db.database import build_engine, build_sessionmaker, create_db_and_tables
from portfolio.services.contact import ContactService
from portfolio.services.health import HealthReporter
from portfolio.services.metrics import MetricsCollector
import time
import logging

#logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info(f"Starting up in {settings.ENVIRONMENT} mode...")
    if settings.synchronize_schema:
        await create_db_and_tables(app.state.engine)
    yield
    logger.info("Shutting down...")
    await app.state.engine.dispose()

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        lifespan=lifespan,
        title="Portfolio API",
        description="Projects, contact form, health and metrics for the portfolio site",
        version=settings.APP_VERSION,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.async_session = build_sessionmaker(app.state.engine)
    app.state.metrics = MetricsCollector(version=settings.APP_VERSION, environment=settings.ENVIRONMENT)
    app.state.health = HealthReporter(settings)
    app.state.contact = ContactService(settings, app.state.metrics)

    #middleware security
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)

    #CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,  # 24 hours
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log slow requests
        if process_time > settings.SLOW_REQUEST_SECONDS:
            logger.warning(f"Slow request: {request.method} {request.url.path} took {process_time:.2f}s")

        return response

    #error handlers
    app.add_exception_handler(PortfolioError, portfolio_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    #API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    #root
    @app.get("/")
    async def root():
        return {
            "message": "Portfolio API",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": f"{settings.API_PREFIX}/health",
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "portfolio.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
