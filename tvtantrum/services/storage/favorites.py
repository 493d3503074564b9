from loguru import logger

from tvtantrum.core.constants import FAVORITES_KEY
from tvtantrum.services.redis_service import RedisService, redis_service


class FavoriteStore:
    """
    Redis-backed favorites, one set of show ids per user.

    Unlike the popularity counters, Redis errors here propagate to the
    caller: a recommendation built from a silently empty favorites set
    would be wrong rather than merely stale.
    """

    def __init__(self, redis: RedisService = redis_service):
        self.redis = redis

    def _key(self, user_id: str) -> str:
        return self.redis.key(FAVORITES_KEY.format(user_id=user_id))

    async def add(self, user_id: str, show_id: int) -> bool:
        """Add a favorite. Returns False when it was already present."""
        client = await self.redis.get_client()
        added = await client.sadd(self._key(user_id), str(show_id))
        logger.debug(f"[{user_id}] Favorite {show_id} {'added' if added else 'already present'}")
        return bool(added)

    async def remove(self, user_id: str, show_id: int) -> bool:
        """Remove a favorite. Returns False when it was not present."""
        client = await self.redis.get_client()
        removed = await client.srem(self._key(user_id), str(show_id))
        return bool(removed)

    async def list_ids(self, user_id: str) -> set[int]:
        client = await self.redis.get_client()
        members = await client.smembers(self._key(user_id))
        ids: set[int] = set()
        for member in members or ():
            try:
                ids.add(int(member))
            except (TypeError, ValueError):
                logger.warning(f"[{user_id}] Ignoring malformed favorite entry {member!r}")
        return ids

    async def is_favorite(self, user_id: str, show_id: int) -> bool:
        client = await self.redis.get_client()
        return bool(await client.sismember(self._key(user_id), str(show_id)))
