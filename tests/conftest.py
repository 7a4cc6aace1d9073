# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Environment variables are set before anything from portfolio is imported,
# because portfolio.core.config reads settings at import time.
# Every test app gets its own SQLite file through aiosqlite.
# =============================================================================

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")

import pytest
from fastapi.testclient import TestClient

from portfolio.core.config import Settings
from portfolio.main import create_app


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'portfolio.db'}",
        DB_SYNCHRONIZE=True,
        RESEND_API_KEY="re_test_key",
        CONTACT_FORM_TO="owner@example.com",
        CONTACT_FORM_FROM="noreply@example.com",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def metrics(app):
    return app.state.metrics


@pytest.fixture
def project_payload():
    """A fully populated project body."""
    return {
        "title": "Portfolio Website",
        "description": "Server rendered portfolio with a projects API",
        "imageUrl": "https://example.com/cover.png",
        "projectUrl": "https://example.com",
        "githubUrl": "https://github.com/example/portfolio",
        "technologies": ["Python", "FastAPI", "PostgreSQL"],
        "isActive": True,
        "sortOrder": 2,
    }


@pytest.fixture
def contact_payload():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "subject": "Collaboration",
        "message": "I would like to talk about a project.",
    }
