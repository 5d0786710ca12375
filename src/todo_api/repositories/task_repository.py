"""Cache-aside task repository.

Reads try the cache first and fall back to the store, populating the
cache on the way out. Writes always hit the store first; only after the
store mutation succeeds are the affected cache keys invalidated.

The cache is an optimization, never a dependency for correctness:
cache failures are logged and swallowed, store failures propagate.
"""

import asyncio
import json
import logging
from typing import Any

from todo_api.config import settings
from todo_api.entities import TaskEntity
from todo_api.exceptions import CacheError
from todo_api.protocols import CacheStore, TaskStore
from todo_api.repositories.cache_keys import TASKS_ALL_KEY, task_key

logger = logging.getLogger(__name__)


def _task_to_dict(task: TaskEntity) -> dict[str, Any]:
    return {"id": task.id, "title": task.title, "completed": task.completed}


def _task_from_dict(data: dict[str, Any]) -> TaskEntity:
    return TaskEntity(id=int(data["id"]), title=str(data["title"]), completed=bool(data["completed"]))


def encode_task(task: TaskEntity) -> bytes:
    """Serialize one task to a cache payload."""
    return json.dumps(_task_to_dict(task)).encode()


def encode_tasks(tasks: list[TaskEntity]) -> bytes:
    """Serialize a task list to a cache payload."""
    return json.dumps([_task_to_dict(t) for t in tasks]).encode()


def decode_task(payload: bytes) -> TaskEntity:
    """Deserialize one task from a cache payload.

    Raises:
        ValueError: If the payload is not a task object
    """
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("cached task payload is not an object")
    return _task_from_dict(data)


def decode_tasks(payload: bytes) -> list[TaskEntity]:
    """Deserialize a task list from a cache payload.

    Raises:
        ValueError: If the payload is not a list of task objects
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("cached task list payload is not a list")
    return [_task_from_dict(item) for item in data]


class CachedTaskRepository:
    """Task repository that fronts a TaskStore with a CacheStore.

    Key scheme:
        - ``tasks:all`` for the full list
        - ``task:{id}`` for a single task

    Invalidation after a successful store mutation:
        - create: list key
        - update: item key, then list key
        - delete: item key, then list key

    Invalidation is not abandoned when the caller is cancelled after the
    store write, so a timed-out request never leaves a stale entry behind.

    The repository holds no mutable state of its own, so one instance can
    serve concurrent requests.

    Example:
        ```python
        repository = CachedTaskRepository(
            store=PostgresTaskStore.create(),
            cache=RedisCacheStore.create(),
        )
        task = await repository.get_task_by_id(1)
        ```
    """

    def __init__(self, store: TaskStore, cache: CacheStore, ttl: int | None = None) -> None:
        """Initialize the repository.

        Args:
            store: Authoritative task store (required).
            cache: Cache backend (required).
            ttl: Time-to-live for cached entries in seconds. Defaults to settings.
        """
        self._store = store
        self._cache = cache
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(cls, store: TaskStore, cache: CacheStore, ttl: int | None = None) -> "CachedTaskRepository":
        """Factory method to create CachedTaskRepository with defaults."""
        return cls(store=store, cache=cache, ttl=ttl)

    async def create_task(self, task: TaskEntity, *, timeout: float | None = None) -> TaskEntity:
        """Persist a new task, then invalidate the list key.

        Args:
            task: Task to create (id is ignored)
            timeout: Deadline in seconds for each backend call

        Returns:
            The created task with its store-assigned id
        """
        created = await self._store.create_task(task, timeout=timeout)
        await self._invalidate_after_write(TASKS_ALL_KEY, timeout=timeout)
        return created

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]:
        """Return all tasks, from cache if available."""
        payload = await self._cache_get(TASKS_ALL_KEY, timeout=timeout)
        if payload is not None:
            try:
                tasks = decode_tasks(payload)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Discarding undecodable cache entry %s: %s", TASKS_ALL_KEY, e)
            else:
                logger.debug("tasks retrieved from cache")
                return tasks

        tasks = await self._store.get_tasks(timeout=timeout)
        await self._cache_set(TASKS_ALL_KEY, encode_tasks(tasks), timeout=timeout)
        return tasks

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        """Return one task by id, from cache if available.

        Raises:
            TaskNotFoundError: If the store has no such task
        """
        key = task_key(task_id)
        payload = await self._cache_get(key, timeout=timeout)
        if payload is not None:
            try:
                task = decode_task(payload)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Discarding undecodable cache entry %s: %s", key, e)
            else:
                logger.debug("task %s retrieved from cache", task_id)
                return task

        task = await self._store.get_task_by_id(task_id, timeout=timeout)
        await self._cache_set(key, encode_task(task), timeout=timeout)
        return task

    async def update_task(self, task: TaskEntity, *, timeout: float | None = None) -> None:
        """Rewrite a task in the store, then invalidate its key and the list key.

        Raises:
            TaskNotFoundError: If the store has no such task
        """
        await self._store.update_task(task, timeout=timeout)
        await self._invalidate_after_write(task_key(task.id), TASKS_ALL_KEY, timeout=timeout)

    async def delete_task(self, task_id: int, *, timeout: float | None = None) -> None:
        """Delete a task from the store, then invalidate its key and the list key.

        Raises:
            TaskNotFoundError: If the store has no such task
        """
        await self._store.delete_task(task_id, timeout=timeout)
        await self._invalidate_after_write(task_key(task_id), TASKS_ALL_KEY, timeout=timeout)

    async def _cache_get(self, key: str, *, timeout: float | None) -> bytes | None:
        try:
            return await self._cache.get(key, timeout=timeout)
        except CacheError as e:
            logger.warning("Cache read failed for %s, falling back to store: %s", key, e)
            return None

    async def _cache_set(self, key: str, payload: bytes, *, timeout: float | None) -> None:
        try:
            await self._cache.set(key, payload, self._ttl, timeout=timeout)
        except CacheError as e:
            logger.warning("Failed to cache %s: %s", key, e)

    async def _invalidate(self, key: str, *, timeout: float | None) -> None:
        try:
            await self._cache.delete(key, timeout=timeout)
        except CacheError as e:
            logger.warning("Failed to invalidate %s: %s", key, e)

    async def _invalidate_keys(self, keys: tuple[str, ...], timeout: float | None) -> None:
        for key in keys:
            await self._invalidate(key, timeout=timeout)

    async def _invalidate_after_write(self, *keys: str, timeout: float | None) -> None:
        """Invalidate keys in order once a store mutation has committed.

        If the caller is cancelled meanwhile (e.g. a request deadline), the
        invalidation still runs to completion, bounded by the per-call cache
        deadline, before the cancellation propagates.
        """
        pending = asyncio.ensure_future(self._invalidate_keys(keys, timeout))
        try:
            await asyncio.shield(pending)
        except asyncio.CancelledError:
            await pending
            raise

    @property
    def ttl(self) -> int:
        """Get the cache TTL in seconds."""
        return self._ttl

    @property
    def store(self) -> TaskStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache
