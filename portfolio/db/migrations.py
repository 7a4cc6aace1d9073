# === portfolio/db/migrations.py ===
"""
Applies the .sql files in portfolio/db/sql in filename order.

Each applied file is recorded in the schema_migrations table and skipped on
later runs. A file runs in a single transaction together with its ledger row,
so a failing file leaves no trace and stops the run.

Usage:
    portfolio-migrate
    python -m portfolio.db.migrations
"""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Set

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "sql"

LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version VARCHAR(255) PRIMARY KEY,
    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

def split_statements(sql: str) -> List[str]:
    # migration files keep one statement per ";" and no procedural bodies
    statements = []
    for chunk in sql.split(";"):
        lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        statement = "\n".join(lines).strip()
        if statement:
            statements.append(statement)
    return statements

def pending_files(directory: Path, applied: Set[str]) -> List[Path]:
    return [path for path in sorted(directory.glob("*.sql")) if path.stem not in applied]

async def applied_versions(conn: AsyncConnection) -> Set[str]:
    result = await conn.execute(text("SELECT version FROM schema_migrations"))
    return {row[0] for row in result}

async def run_migrations(engine: AsyncEngine, directory: Optional[Path] = None) -> List[str]:
    """Returns the versions applied by this run."""
    directory = Path(directory or MIGRATIONS_DIR)

    async with engine.begin() as conn:
        await conn.execute(text(LEDGER_DDL))
        applied = await applied_versions(conn)

    files = pending_files(directory, applied)
    if not files:
        logger.info(f"No pending migrations in {directory}")
        return []

    done = []
    for path in files:
        logger.info(f"Running migration: {path.name}")
        async with engine.begin() as conn:
            for statement in split_statements(path.read_text(encoding="utf-8")):
                await conn.exec_driver_sql(statement)
            await conn.execute(
                text("INSERT INTO schema_migrations (version) VALUES (:version)"),
                {"version": path.stem},
            )
        logger.info(f"Successfully applied: {path.name}")
        done.append(path.stem)

    return done

async def _main() -> None:
    from portfolio.core.config import settings
    from portfolio.db.database import build_engine

    engine = build_engine(settings)
    url = settings.database_url
    logger.info(f"Connecting to {url.host}/{url.database} as {url.username}")
    try:
        applied = await run_migrations(engine)
        logger.info(f"Applied {len(applied)} migration(s)")
    finally:
        await engine.dispose()

def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())

if __name__ == "__main__":
    main()
