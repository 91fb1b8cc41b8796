"""Application Resources: explicit handle bundle created at startup, closed at shutdown.

Invariants:
    - Exactly one AppResources per running app, stored on app.state.resources
    - cache is None when no Redis URL is configured
    - close() releases every handle it opened, cache first; the database is
      closed even when closing the cache fails

Design Decisions:
    - Handles are passed by reference to dependencies and the health aggregator,
      never reached through module globals
"""

import logging
from dataclasses import dataclass

from helpdesk.config import Settings
from helpdesk.infrastructure.cache import RedisCache
from helpdesk.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


@dataclass
class AppResources:
    settings: Settings
    database: DatabaseSessionManager
    cache: RedisCache | None = None

    @classmethod
    def open(cls, settings: Settings) -> "AppResources":
        database = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        cache = None
        if settings.redis_url:
            cache = RedisCache.from_url(
                settings.redis_url,
                connect_timeout=settings.redis_connect_timeout_seconds,
            )
        else:
            logger.info("Redis not configured; cache probe will report unknown")
        return cls(settings=settings, database=database, cache=cache)

    async def close(self) -> None:
        try:
            if self.cache is not None:
                await self.cache.close()
        finally:
            await self.database.close()
