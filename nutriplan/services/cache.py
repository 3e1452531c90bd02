"""
NutriPlan API - Redis Cache Service.

JSON values with TTLs in Redis. Its one tenant today is the logout token
blacklist. The connection is opened on first use, so the API boots without
Redis and every call answers "nothing cached" while Redis is down.
"""

import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

import redis.asyncio as redis

from settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitBreaker:
    """Stops calling Redis for ``cooldown`` seconds after ``threshold`` failures in a row."""

    def __init__(self, threshold: int = 5, cooldown: float = 60.0):
        self.threshold = threshold
        self.cooldown = cooldown
        self.failures = 0
        self.reopen_at: Optional[float] = None

    @property
    def is_open(self) -> bool:
        if self.reopen_at is None:
            return False
        if time.monotonic() < self.reopen_at:
            return True
        self.reopen_at = None
        self.failures = 0
        return False

    def failed(self) -> None:
        self.failures += 1
        if self.failures >= self.threshold and self.reopen_at is None:
            self.reopen_at = time.monotonic() + self.cooldown
            logger.warning(f"Redis unavailable after {self.failures} failures, pausing for {self.cooldown:.0f}s")

    def succeeded(self) -> None:
        if self.failures:
            logger.info("Redis reachable again")
        self.failures = 0


class CacheService:
    """Lazily connected Redis wrapper that never raises to callers."""

    def __init__(self, redis_url: str, breaker: Optional[CircuitBreaker] = None):
        self._redis_url = redis_url
        self._client: Optional[redis.Redis] = None
        self._enabled = True
        self.breaker = breaker or CircuitBreaker()

    def disable(self) -> None:
        """Treat Redis as absent for the rest of the process."""
        self._enabled = False

    @property
    def client(self) -> Optional[redis.Redis]:
        if self._client is None and self._enabled:
            self._client = redis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
                retry_on_timeout=True,
            )
        return self._client

    async def _call(self, operation: str, fn: Callable[[redis.Redis], Awaitable[T]], fallback: T) -> T:
        if not self._enabled or self.breaker.is_open:
            return fallback
        try:
            result = await fn(self.client)
        except Exception as e:
            logger.debug(f"Redis {operation} failed: {e}")
            self.breaker.failed()
            return fallback
        self.breaker.succeeded()
        return result

    async def get(self, key: str) -> Optional[Any]:
        """Decoded value for ``key``, or None on a miss or when Redis is unavailable."""
        async def read(client: redis.Redis) -> Optional[Any]:
            raw = await client.get(key)
            return json.loads(raw) if raw else None

        return await self._call("get", read, None)

    async def set(self, key: str, value: Any, ttl_seconds: int = 3600) -> bool:
        """Store ``value`` as JSON. Returns False if it was not written."""
        async def write(client: redis.Redis) -> bool:
            await client.setex(key, max(int(ttl_seconds), 1), json.dumps(value))
            return True

        return await self._call("set", write, False)

    async def healthcheck(self) -> bool:
        async def ping(client: redis.Redis) -> bool:
            return bool(await client.ping())

        return await self._call("ping", ping, False)

    async def get_stats(self) -> Dict[str, Any]:
        """Server counters shown by ``/health/redis``."""
        info = await self._call("info", lambda client: client.info(), {})
        fields = ("connected_clients", "used_memory_human", "keyspace_hits", "keyspace_misses", "evicted_keys")
        return {name: info.get(name) for name in fields if name in info}


cache_service = CacheService(settings.redis_url_with_auth)
