# === portfolio/services/health.py ===
import asyncio
import time
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.config import Settings
from portfolio.db.database import ping

logger = logging.getLogger(__name__)


class HealthReporter:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.start_time = time.time()

    async def check(self, db: AsyncSession) -> Dict[str, Any]:
        """Round-trips SELECT 1 against the database and reports the outcome."""
        uptime = time.time() - self.start_time
        database: Dict[str, Any] = {"status": "disconnected", "type": db.bind.dialect.name if db.bind else "unknown"}

        try:
            await asyncio.wait_for(ping(db), timeout=self.settings.DB_QUERY_TIMEOUT)
            database["status"] = "connected"
        except Exception as e:
            logger.warning(f"Health check database probe failed: {e!r}")
            database["status"] = "error"
            if not self.settings.is_production:
                database["error"] = str(e) or type(e).__name__

        return {
            "status": "healthy" if database["status"] == "connected" else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": self.settings.APP_VERSION,
            "service": "backend",
            "uptime": uptime,
            "environment": self.settings.ENVIRONMENT,
            "database": database,
        }
