"""Redis key/value access.

Plain string get/set against an external Redis; no expiry, eviction or
invalidation is applied to the keys written here.
"""

import threading
from typing import Optional

import redis

from .config import settings

_client: Optional[redis.Redis] = None
_client_lock = threading.Lock()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance returning decoded strings."""
    return redis.from_url(
        settings.REDIS_URL,
        password=settings.REDIS_PASSWORD,
        decode_responses=True,
    )


class KeyValueCache:
    """String key/value operations over a Redis client."""

    def __init__(self, client: Optional[redis.Redis] = None) -> None:
        self._client = client or get_redis_client()

    def get(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def ping(self) -> bool:
        """Check if Redis is accessible."""
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        return self._client


def get_cache() -> KeyValueCache:
    """FastAPI dependency returning the process-wide cache.

    The Redis client connects lazily, so creating it does not require a
    running server.
    """
    global _client
    with _client_lock:
        if _client is None:
            _client = get_redis_client()
    return KeyValueCache(_client)
