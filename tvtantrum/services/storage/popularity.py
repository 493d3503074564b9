from datetime import datetime, timezone

from loguru import logger

from tvtantrum.core.constants import (
    POPULARITY_INDEX_KEY,
    POPULARITY_KEY,
    SEARCH_POPULARITY_WEIGHT,
    VIEW_POPULARITY_WEIGHT,
)
from tvtantrum.models.show import ShowPopularity
from tvtantrum.services.redis_service import RedisService, redis_service


class PopularityTracker:
    """
    Search and view counters per show.

    Counters live in a hash per show; a sorted set indexes the combined
    popularity score (searches + 2 x views) for top-N reads. Tracking is
    best effort: Redis failures are logged by RedisService and never fail
    the request that triggered them.
    """

    def __init__(self, redis: RedisService = redis_service):
        self.redis = redis

    def _key(self, show_id: int) -> str:
        return self.redis.key(POPULARITY_KEY.format(show_id=show_id))

    @property
    def _index_key(self) -> str:
        return self.redis.key(POPULARITY_INDEX_KEY)

    async def _track(self, show_id: int, counter: str, timestamp_field: str, weight: int) -> None:
        key = self._key(show_id)
        await self.redis.hincrby(key, counter, 1)
        await self.redis.hset(key, {timestamp_field: datetime.now(timezone.utc).isoformat()})
        await self.redis.zincrby(self._index_key, weight, str(show_id))

    async def track_search(self, show_id: int) -> None:
        await self._track(show_id, "search_count", "last_searched", SEARCH_POPULARITY_WEIGHT)
        logger.debug(f"Tracked search for show {show_id}")

    async def track_view(self, show_id: int) -> None:
        await self._track(show_id, "view_count", "last_viewed", VIEW_POPULARITY_WEIGHT)
        logger.debug(f"Tracked view for show {show_id}")

    async def get(self, show_id: int) -> ShowPopularity:
        data = await self.redis.hgetall(self._key(show_id))
        return ShowPopularity(
            show_id=show_id,
            search_count=int(data.get("search_count", 0)),
            view_count=int(data.get("view_count", 0)),
            last_searched=data.get("last_searched") or None,
            last_viewed=data.get("last_viewed") or None,
        )

    async def top_show_ids(self, limit: int) -> list[int]:
        """Most popular show ids first."""
        if limit <= 0:
            return []
        members = await self.redis.zrevrange(self._index_key, 0, limit - 1)
        ids = []
        for member in members:
            try:
                ids.append(int(member))
            except (TypeError, ValueError):
                continue
        return ids
