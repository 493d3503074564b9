from collections import defaultdict

import pytest
import redis.asyncio as aioredis
from fastapi.testclient import TestClient

from tvtantrum.core.app import app
from tvtantrum.models.show import Show
from tvtantrum.services.redis_service import RedisService, redis_service
from tvtantrum.services.sensory import unrecognized_reporter
from tvtantrum.services.storage import FavoriteStore, PopularityTracker, ShowCatalog, ShowRepository, show_catalog


class FakeRedis:
    """In-memory stand-in for the redis.asyncio client commands the stores use."""

    def __init__(self):
        self.sets: dict[str, set[str]] = defaultdict(set)
        self.hashes: dict[str, dict[str, str]] = defaultdict(dict)
        self.zsets: dict[str, dict[str, float]] = defaultdict(dict)
        self.closed = False

    async def sadd(self, key, *members):
        before = len(self.sets[key])
        self.sets[key].update(members)
        return len(self.sets[key]) - before

    async def srem(self, key, *members):
        removed = sum(1 for m in members if m in self.sets[key])
        self.sets[key].difference_update(members)
        return removed

    async def smembers(self, key):
        return set(self.sets.get(key, set()))

    async def sismember(self, key, member):
        return int(member in self.sets.get(key, set()))

    async def hincrby(self, key, field, amount=1):
        value = int(self.hashes[key].get(field, 0)) + amount
        self.hashes[key][field] = str(value)
        return value

    async def hset(self, key, mapping=None):
        self.hashes[key].update(mapping or {})
        return len(mapping or {})

    async def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    async def zincrby(self, key, amount, member):
        self.zsets[key][member] = self.zsets[key].get(member, 0.0) + amount
        return self.zsets[key][member]

    async def zrevrange(self, key, start, end):
        ordered = sorted(self.zsets.get(key, {}).items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
        members = [member for member, _ in ordered]
        return members[start:] if end == -1 else members[start : end + 1]

    async def close(self):
        self.closed = True


class BrokenRedis:
    """Client whose every command fails like an unreachable server."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise aioredis.ConnectionError("Connection refused")

        return fail


def build_show(show_id: int, stimulation_score: int, themes: list[str] | None = None, **kwargs) -> Show:
    return Show(
        id=show_id,
        name=kwargs.pop("name", f"Show {show_id}"),
        stimulation_score=stimulation_score,
        themes=themes or [],
        **kwargs,
    )


@pytest.fixture
def make_show():
    return build_show


@pytest.fixture(autouse=True)
def reset_reporter():
    unrecognized_reporter.reset()
    yield
    unrecognized_reporter.reset()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def redis(fake_redis) -> RedisService:
    service = RedisService()
    service._client = fake_redis
    return service


@pytest.fixture
def sample_shows(make_show) -> list[Show]:
    return [
        make_show(1, 1, ["Music"], name="Calm Songs", age_range="0-3", interactivity_level="Low"),
        make_show(2, 2, ["Music", "Adventure"], name="Sing Along", age_range="2-5", interactivity_level="Low"),
        make_show(3, 3, ["Adventure"], name="Big Trip", age_range="3-6", interactivity_level="Moderate"),
        make_show(4, 4, ["Science"], name="Lab Kids", age_range="5-8", interactivity_level="High"),
        make_show(5, 5, ["Music"], name="Dance Party", age_range="4+", interactivity_level="very high"),
        make_show(6, 2, ["Nature"], name="Quiet Forest", age_range="2-4", interactivity_level="minimal"),
        make_show(7, 3, ["Music", "Nature"], name="Garden Band", age_range="3-5", interactivity_level="medium"),
    ]


@pytest.fixture
def catalog(sample_shows) -> ShowCatalog:
    return ShowCatalog(sample_shows)


@pytest.fixture
def repository(catalog, redis) -> ShowRepository:
    return ShowRepository(catalog, FavoriteStore(redis), PopularityTracker(redis))


@pytest.fixture
def api_client(sample_shows, fake_redis):
    """TestClient wired to the global singletons with an in-memory Redis and catalog."""
    previous_client = redis_service._client
    redis_service._client = fake_redis
    show_catalog._shows = {}
    show_catalog.upsert_many(sample_shows)

    yield TestClient(app)

    redis_service._client = previous_client
    show_catalog._shows = {}


@pytest.fixture
def broken_redis() -> RedisService:
    service = RedisService()
    service._client = BrokenRedis()
    return service
