# === portfolio/services/project_service.py ===
import asyncio
import time
import uuid
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy import exc as sa_exc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from portfolio.core.exceptions import InvalidIdError, NotFoundError, StorageError
from portfolio.models.project import Project
from portfolio.schemas.project import ProjectCreate, ProjectUpdate
from portfolio.services.metrics import MetricsCollector

logger = logging.getLogger(__name__)

TABLE = Project.__tablename__


def parse_id(value) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidIdError(str(value))


class ProjectService:
    """Business logic for projects. Every read goes to the database."""

    def __init__(self, db: AsyncSession, metrics: Optional[MetricsCollector] = None):
        self.db = db
        self.metrics = metrics

    @asynccontextmanager
    async def _query(self, operation: str):
        start_time = time.perf_counter()
        try:
            yield
        except (sa_exc.SQLAlchemyError, OSError, OverflowError, asyncio.TimeoutError) as e:
            await self.db.rollback()
            if self.metrics:
                self.metrics.record_db_error(operation, type(e).__name__)
            logger.error(f"Database {operation} on {TABLE} failed: {e}")
            unavailable = isinstance(e, (sa_exc.OperationalError, sa_exc.InterfaceError, OSError, asyncio.TimeoutError)) or (
                isinstance(e, sa_exc.DBAPIError) and e.connection_invalidated
            )
            raise StorageError(
                "Database is unavailable" if unavailable else "Database operation failed",
                unavailable=unavailable,
            ) from e
        finally:
            if self.metrics:
                self.metrics.record_db_query(operation, TABLE, time.perf_counter() - start_time)

    async def _get(self, project_id: uuid.UUID) -> Optional[Project]:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    async def create(self, command: ProjectCreate) -> Project:
        project = Project(**command.model_dump())
        async with self._query("insert"):
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
        logger.info(f"Created project {project.id}")
        return project

    async def find_all(self) -> List[Project]:
        async with self._query("select"):
            result = await self.db.execute(
                select(Project).order_by(Project.sort_order.asc(), Project.created_at.desc())
            )
            return list(result.scalars().all())

    async def find_one(self, project_id) -> Project:
        pk = parse_id(project_id)
        async with self._query("select"):
            project = await self._get(pk)
        if project is None:
            raise NotFoundError("Project", str(pk))
        return project

    async def update(self, project_id, command: ProjectUpdate) -> Project:
        project = await self.find_one(project_id)
        changes = command.changes()

        async with self._query("update"):
            for key, value in changes.items():
                setattr(project, key, value)
            project.updated_at = func.now()
            await self.db.commit()
            await self.db.refresh(project)
        logger.info(f"Updated project {project.id}: {sorted(changes)}")
        return project

    async def remove(self, project_id) -> None:
        project = await self.find_one(project_id)
        async with self._query("delete"):
            await self.db.delete(project)
            await self.db.commit()
        logger.info(f"Deleted project {project.id}")
