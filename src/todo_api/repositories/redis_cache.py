"""Redis implementation of CacheStore.

Plain GET / SET EX / DEL against a single Redis instance. Every call is
bounded by a deadline; backend failures and expired deadlines surface as
CacheError so the repository can treat them apart from a miss.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

import redis.asyncio as redis
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from todo_api.config import get_redis_client, settings
from todo_api.exceptions import CacheError, CacheTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisCacheStore:
    """Redis implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        default_timeout: float | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            default_timeout: Deadline in seconds for calls that pass none.
        """
        self._client = redis_client or get_redis_client()
        self._default_timeout = default_timeout or settings.cache_timeout

    @classmethod
    def create(cls, default_timeout: float | None = None) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults.

        Args:
            default_timeout: Call deadline in seconds. If None, uses settings.

        Returns:
            Configured RedisCacheStore
        """
        return cls(default_timeout=default_timeout)

    async def _call(self, key: str, awaitable: Awaitable[T], timeout: float | None) -> T:
        deadline = timeout if timeout is not None else self._default_timeout
        try:
            return await asyncio.wait_for(awaitable, timeout=deadline)
        except (asyncio.TimeoutError, RedisTimeoutError) as e:
            raise CacheTimeoutError(key, deadline) from e
        except (RedisError, OSError) as e:
            raise CacheError(f"redis call failed for {key!r}: {e}", key) from e

    async def get(self, key: str, *, timeout: float | None = None) -> bytes | None:
        """Fetch a payload from Redis.

        Args:
            key: The cache key
            timeout: Deadline in seconds

        Returns:
            The stored bytes, or None when the key is absent or expired
        """
        value = await self._call(key, self._client.get(key), timeout)
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        if isinstance(value, str):
            return value.encode()
        return value

    async def set(self, key: str, value: bytes, ttl: int, *, timeout: float | None = None) -> None:
        """Store a payload with SET EX.

        Args:
            key: The cache key
            value: Serialized payload
            ttl: Time-to-live in seconds
            timeout: Deadline in seconds
        """
        await self._call(key, self._client.set(key, value, ex=ttl), timeout)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str, *, timeout: float | None = None) -> None:
        """Remove a key with DEL.

        Args:
            key: The cache key
            timeout: Deadline in seconds
        """
        await self._call(key, self._client.delete(key), timeout)
        logger.debug("Cache DELETE: %s", key)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._call("PING", self._client.ping(), None))
        except CacheError:
            return False

    async def close(self) -> None:
        """Close the client and release its connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
