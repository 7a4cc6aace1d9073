# === portfolio/db/database.py ===

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from fastapi import Request
from typing import AsyncGenerator
import logging

from portfolio.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()

def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.database_url
    connect_args = {}
    if url.get_backend_name() == "postgresql" and url.get_driver_name() == "asyncpg":
        connect_args["timeout"] = settings.DB_CONNECT_TIMEOUT
        connect_args["command_timeout"] = settings.DB_QUERY_TIMEOUT
        if settings.DB_SSL:
            connect_args["ssl"] = "require"

    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )

def build_sessionmaker(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def create_db_and_tables(engine: AsyncEngine):
    # registers the mapped tables on Base.metadata
    from portfolio.models import project  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables synchronized")

async def ping(session: AsyncSession) -> None:
    await session.execute(text("SELECT 1"))

async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.async_session() as session:
        yield session
