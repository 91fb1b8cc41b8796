"""Redis Cache Client: thin async wrapper used for health probing.

Invariants:
    - Constructing the client opens no connection; the first command does
    - ping() raises on failure; callers decide how to report it
    - close() releases the connection pool
"""

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class RedisCache:
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, connect_timeout: float = 2.0) -> "RedisCache":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=connect_timeout,
            socket_timeout=connect_timeout,
        )
        return cls(client)

    async def ping(self) -> None:
        await self.client.ping()

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis disconnected")
