from typing import Any

import redis.asyncio as redis
from loguru import logger

from tvtantrum.core.config import settings


class RedisService:
    def __init__(self) -> None:
        self._client: redis.Redis | None = None
        if not settings.REDIS_URL:
            logger.warning("REDIS_URL is not set. Redis operations will fail until configured.")

    @staticmethod
    def key(suffix: str) -> str:
        """Namespace a key with the configured prefix."""
        return f"{settings.REDIS_KEY_PREFIX}{suffix}"

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for RedisService")
            self._client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=getattr(settings, "REDIS_MAX_CONNECTIONS", 100),
                health_check_interval=30,
                socket_keepalive=True,
            )
        return self._client

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int | None:
        """Increment a hash field.

        Returns:
            The new value, or None if an error occurred
        """
        try:
            client = await self.get_client()
            return int(await client.hincrby(key, field, amount))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to increment '{key}.{field}' in Redis: {exc}")
            return None

    async def hset(self, key: str, mapping: dict[str, Any]) -> bool:
        """Set several hash fields at once.

        Returns:
            True if successful, False otherwise
        """
        try:
            client = await self.get_client()
            await client.hset(key, mapping={k: str(v) for k, v in mapping.items()})
            return True
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to set hash '{key}' in Redis: {exc}")
            return False

    async def hgetall(self, key: str) -> dict[str, str]:
        """Get all fields of a hash.

        Returns:
            The hash as a dict; empty if the key doesn't exist or an error occurred
        """
        try:
            client = await self.get_client()
            return await client.hgetall(key) or {}
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to read hash '{key}' from Redis: {exc}")
            return {}

    async def zincrby(self, key: str, amount: float, member: str) -> float | None:
        """Increment the score of a sorted-set member.

        Returns:
            The new score, or None if an error occurred
        """
        try:
            client = await self.get_client()
            return float(await client.zincrby(key, amount, member))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to increment '{member}' in sorted set '{key}': {exc}")
            return None

    async def zrevrange(self, key: str, start: int, end: int) -> list[str]:
        """Members of a sorted set, highest score first.

        Returns:
            List of members; empty if the key doesn't exist or an error occurred
        """
        try:
            client = await self.get_client()
            return list(await client.zrevrange(key, start, end))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to read sorted set '{key}' from Redis: {exc}")
            return []

    async def close(self) -> None:
        """Close and disconnect the Redis client"""
        if self._client is not None:
            try:
                await self._client.close()
                logger.info("RedisService client closed")
            except Exception as exc:
                logger.warning(f"Failed to close RedisService client: {exc}")
            finally:
                self._client = None


redis_service = RedisService()
