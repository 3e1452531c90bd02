import asyncio

from nutriplan.services.cache import CacheService, CircuitBreaker


class BrokenRedis:
    def __init__(self):
        self.calls = 0

    async def get(self, key):
        self.calls += 1
        raise ConnectionError("redis down")

    async def setex(self, key, ttl, value):
        self.calls += 1
        raise ConnectionError("redis down")


class DictRedis:
    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        self.data[key] = value


def _service(client, **breaker):
    service = CacheService("redis://unused", CircuitBreaker(**breaker))
    service._client = client
    return service


def test_values_round_trip_as_json():
    service = _service(DictRedis())
    assert asyncio.run(service.set("k", {"a": [1, 2]}, 30)) is True
    assert asyncio.run(service.get("k")) == {"a": [1, 2]}
    assert asyncio.run(service.get("missing")) is None


def test_failures_open_the_breaker():
    client = BrokenRedis()
    service = _service(client, threshold=2, cooldown=60)

    assert asyncio.run(service.get("k")) is None
    assert asyncio.run(service.set("k", 1)) is False
    assert service.breaker.is_open

    asyncio.run(service.get("k"))
    assert client.calls == 2


def test_breaker_closes_after_cooldown():
    breaker = CircuitBreaker(threshold=1, cooldown=0)
    breaker.failed()
    assert breaker.is_open is False
    assert breaker.failures == 0


def test_disabled_cache_never_touches_redis():
    client = BrokenRedis()
    service = _service(client)
    service.disable()

    assert asyncio.run(service.get("k")) is None
    assert asyncio.run(service.healthcheck()) is False
    assert asyncio.run(service.get_stats()) == {}
    assert client.calls == 0


def test_corrupt_value_reads_as_a_miss():
    client = DictRedis()
    client.data["blacklist:abc"] = "{not json"
    service = _service(client)

    assert asyncio.run(service.get("blacklist:abc")) is None
    assert service.breaker.failures == 1
