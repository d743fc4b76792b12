"""Redis key-value store."""

from typing import Any

from loguru import logger

from ..exceptions import StorageError


class RedisKVStore:
    """Redis store implementation."""

    def __init__(self, redis_url: str):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL.
        """
        self.redis_url = redis_url
        self.redis: Any = None

    async def startup(self) -> None:
        """Initialize Redis connection."""
        import redis.asyncio as redis

        self.redis = redis.from_url(self.redis_url, decode_responses=True)
        try:
            await self.redis.ping()
        except (ConnectionError, TimeoutError, redis.RedisError) as e:
            raise StorageError(f"Redis connection failed: {e}") from e
        logger.info("Redis page cache connected")

    async def shutdown(self) -> None:
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def get(self, key: str) -> str | None:
        """Get stored value.

        Args:
            key: Store key.

        Returns:
            Stored string if found, None otherwise.
        """
        if not self.redis:
            raise StorageError("Redis store not started")
        value: str | None = await self.redis.get(key)
        return value

    async def put(self, key: str, value: str) -> None:
        """Store value without expiry.

        Args:
            key: Store key.
            value: Serialized record.
        """
        if not self.redis:
            raise StorageError("Redis store not started")
        await self.redis.set(key, value)

    async def health_check(self) -> bool:
        if not self.redis:
            return False
        try:
            return bool(await self.redis.ping())
        except (ConnectionError, TimeoutError, OSError) as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
