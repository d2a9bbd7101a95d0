"""Insurer reference data service."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster_admin.core.exceptions import StorageException
from roster_admin.core.redis_client import CacheManager
from roster_admin.models.insurers import insurers

logger = structlog.get_logger()


class InsurerService:
    """Service for insurer options."""

    # Reference data changes rarely
    INSURER_LIST_CACHE_TTL = 3600
    INSURER_LIST_CACHE_KEY = "insurer:list"

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    async def list_insurers(self, db: AsyncSession) -> list[dict]:
        """List insurer options ordered by label."""
        if self.cache:
            cached = self.cache.get_json(self.INSURER_LIST_CACHE_KEY)
            if cached is not None:
                return cached

        query = select(insurers.c.code, insurers.c.label).order_by(insurers.c.label)

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("insurer_list_failed", error=str(e), exc_info=True)
            raise StorageException() from e

        options = [dict(row) for row in result.mappings().all()]

        if self.cache:
            self.cache.set_json(
                self.INSURER_LIST_CACHE_KEY, options, ttl=self.INSURER_LIST_CACHE_TTL
            )

        return options

    def invalidate(self) -> None:
        """Drop the cached insurer list."""
        if self.cache:
            self.cache.delete(self.INSURER_LIST_CACHE_KEY)
