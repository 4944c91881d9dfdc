"""
Tests for the reference-data cache.
"""

from redis.exceptions import RedisError

from airsense.utils.cache import MUNICIPALITIES_KEY, ReferenceCache


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    def ping(self):
        return True


class BrokenRedis(FakeRedis):
    def get(self, key):
        raise RedisError("down")

    def ping(self):
        raise RedisError("down")


def loader_returning(value, calls):
    async def loader():
        calls.append(True)
        return value
    return loader


async def test_disabled_cache_always_loads():
    cache = ReferenceCache(enabled=False)
    calls = []
    assert await cache.get_or_load(MUNICIPALITIES_KEY, loader_returning([1], calls)) == [1]
    assert await cache.get_or_load(MUNICIPALITIES_KEY, loader_returning([1], calls)) == [1]
    assert len(calls) == 2
    assert cache.health_check() == "disabled"


async def test_cache_hit_skips_loader():
    cache = ReferenceCache(enabled=False, ttl=60)
    cache.client = FakeRedis()
    calls = []
    payload = [{"id_municipio": 5, "nombre_municipio": "Cali"}]

    assert await cache.get_or_load(MUNICIPALITIES_KEY, loader_returning(payload, calls)) == payload
    assert await cache.get_or_load(MUNICIPALITIES_KEY, loader_returning(payload, calls)) == payload
    assert len(calls) == 1
    assert cache.client.ttls[MUNICIPALITIES_KEY] == 60
    assert cache.health_check() == "healthy"


async def test_broken_redis_falls_through():
    cache = ReferenceCache(enabled=False)
    cache.client = BrokenRedis()
    calls = []
    assert await cache.get_or_load(MUNICIPALITIES_KEY, loader_returning(["x"], calls)) == ["x"]
    assert calls == [True]
    assert cache.health_check() == "unhealthy"
