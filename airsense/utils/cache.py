"""
Reference-data cache.

The municipality list and the pollutant dictionary change only when the
ingestion pipeline reloads the dataset, so their payloads are kept in Redis.
The cache is best-effort: when Redis is disabled or unreachable every lookup
falls through to the database and the API keeps answering.
"""

import json
from typing import Any, Awaitable, Callable, Optional

import redis
from redis.exceptions import RedisError

from airsense.config import settings
from airsense.utils.logging_config import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "airsense"

MUNICIPALITIES_KEY = f"{KEY_PREFIX}:municipios"
DICTIONARY_KEY = f"{KEY_PREFIX}:diccionario"


class ReferenceCache:
    """
    JSON payload cache in Redis.

    Args:
        enabled: Try to connect at startup; a failed connection disables the cache
        ttl: Default time to live of an entry, in seconds
    """

    def __init__(self, enabled: bool = True, ttl: int = 3600):
        self.ttl = ttl
        self.client: Optional[redis.Redis] = None
        if enabled:
            self.client = self._connect()

    @property
    def enabled(self) -> bool:
        return self.client is not None

    @staticmethod
    def _connect() -> Optional[redis.Redis]:
        client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD or None,
            db=settings.REDIS_DB,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            client.ping()
        except (RedisError, ConnectionError) as e:
            logger.warning(f"Redis unavailable ({e}); reference data will not be cached")
            return None
        logger.info(f"Reference cache on Redis {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        return client

    def get(self, key: str) -> Optional[Any]:
        """Cached payload for ``key``, or None on a miss or any Redis failure."""
        if not self.enabled:
            return None
        try:
            raw = self.client.get(key)
        except RedisError as e:
            logger.error(f"Cache read failed for '{key}': {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.error(f"Discarding unreadable cache entry '{key}'")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled:
            return False
        try:
            self.client.setex(key, ttl or self.ttl, json.dumps(value, default=str))
        except (RedisError, TypeError, ValueError) as e:
            logger.error(f"Cache write failed for '{key}': {e}")
            return False
        return True

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """
        Return the cached payload for ``key``, loading and storing it on a miss.

        Args:
            key: Cache key
            loader: Coroutine factory that reads the payload from the database

        Returns:
            The payload, from Redis or from ``loader``
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached
        value = await loader()
        self.set(key, value)
        return value

    def health_check(self) -> str:
        """
        Returns:
            "disabled", "healthy" or "unhealthy"
        """
        if not self.enabled:
            return "disabled"
        try:
            self.client.ping()
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return "unhealthy"
        return "healthy"


cache = ReferenceCache(enabled=settings.REDIS_ENABLED, ttl=settings.CACHE_TTL_REFERENCE)
