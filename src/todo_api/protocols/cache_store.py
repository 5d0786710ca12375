"""Cache storage protocol.

Defines the interface for any key-value cache backend with per-entry
expiry. Values are opaque bytes; callers own serialization.

Implementations can include:
- Redis (default)
- Memcached
- An in-process dictionary (tests)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache backends.

    A miss (absent or expired key) is reported as ``None`` from ``get``.
    Backend failures raise ``CacheError`` so callers can tell a miss
    from an outage.

    Example:
        ```python
        from todo_api.protocols import CacheStore

        cache: CacheStore = RedisCacheStore(redis_client)
        ```
    """

    async def get(self, key: str, *, timeout: float | None = None) -> bytes | None:
        """Fetch a cached payload.

        Args:
            key: The cache key
            timeout: Deadline in seconds; backend default when None

        Returns:
            The stored payload, or None on a miss

        Raises:
            CacheError: If the backend fails or the deadline expires
        """
        ...

    async def set(self, key: str, value: bytes, ttl: int, *, timeout: float | None = None) -> None:
        """Store a payload that expires after ``ttl`` seconds.

        Raises:
            CacheError: If the backend fails or the deadline expires
        """
        ...

    async def delete(self, key: str, *, timeout: float | None = None) -> None:
        """Remove a key. Removing an absent key is not an error.

        Raises:
            CacheError: If the backend fails or the deadline expires
        """
        ...

    async def health_check(self) -> bool:
        """Check if the cache backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
