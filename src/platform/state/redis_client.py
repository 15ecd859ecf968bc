from typing import Optional

from redis.asyncio import ConnectionPool as AsyncConnectionPool, Redis as AsyncRedis
from redis.exceptions import RedisError

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class RedisClient:
    """
    Async Redis client with connection pool.

    Usage:
        await redis_client.initialize()  # In startup
        client = redis_client.get_client()  # In handlers
    """

    def __init__(self) -> None:
        self._client: Optional[AsyncRedis] = None

    async def initialize(self) -> AsyncRedis:
        """Initialize connection pool (idempotent)"""
        if self._client is not None:
            return self._client

        pool = AsyncConnectionPool.from_url(
            f'redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}',
            password=settings.REDIS_PASSWORD or None,
            decode_responses=settings.REDIS_DECODE_RESPONSES,
            max_connections=settings.REDIS_POOL_MAX_CONNECTIONS,
            socket_timeout=settings.REDIS_POOL_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_POOL_SOCKET_CONNECT_TIMEOUT,
            socket_keepalive=settings.REDIS_POOL_SOCKET_KEEPALIVE,
            health_check_interval=settings.REDIS_POOL_HEALTH_CHECK_INTERVAL,
        )
        client = AsyncRedis.from_pool(pool)
        try:
            await client.ping()
        except (RedisError, OSError):
            await client.aclose()
            raise
        self._client = client
        Logger.base.info(f'📡 [REDIS] Connected to {settings.REDIS_HOST}:{settings.REDIS_PORT}')
        return client

    def get_client(self) -> AsyncRedis:
        if self._client is None:
            raise RuntimeError(
                'Redis client not initialized. Call await redis_client.initialize() during startup.'
            )
        return self._client

    async def disconnect(self) -> None:
        """Close connection pool"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Global singleton
redis_client = RedisClient()
