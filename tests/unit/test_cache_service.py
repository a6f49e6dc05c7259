"""Tests for the Redis cache wrapper (fake redis client)."""

import redis.asyncio as redis

from newsecho.core.config import get_settings
from newsecho.infrastructure.cache import CacheService


class FakeRedis:
    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_next = False
        self.closed = False

    async def get(self, key):
        if self.fail_next:
            self.fail_next = False
            raise redis.RedisError("boom")
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, key):
        self.store.pop(key, None)

    async def aclose(self):
        self.closed = True


async def test_set_get_delete_json_values() -> None:
    fake = FakeRedis()
    cache = CacheService(redis_client=fake, settings=get_settings())
    assert await cache.set("dashboard:summary", {"total": 3}, ttl=120)
    assert fake.ttls["dashboard:summary"] == 120
    assert await cache.get("dashboard:summary") == {"total": 3}
    assert await cache.delete("dashboard:summary")
    assert await cache.get("dashboard:summary") is None


async def test_errors_are_reported_as_misses() -> None:
    fake = FakeRedis()
    cache = CacheService(redis_client=fake, settings=get_settings())
    await cache.set("k", 1)
    fake.fail_next = True
    assert await cache.get("k") is None


async def test_unconnected_cache_is_a_noop() -> None:
    cache = CacheService(settings=get_settings())
    assert cache.is_available() is False
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False
    assert await cache.delete("k") is False


async def test_disconnect_closes_client() -> None:
    fake = FakeRedis()
    cache = CacheService(redis_client=fake, settings=get_settings())
    await cache.disconnect()
    assert fake.closed is True
    assert cache.is_available() is False
