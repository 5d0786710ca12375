"""Repository layer for data access.

This layer abstracts external dependencies (Redis, Postgres) behind
protocol-based interfaces, and hosts the cache-aside repository that
decides between them.

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from todo_api.protocols import CacheStore, TaskRepository, TaskStore

from .cache_keys import TASK_KEY_PREFIX, TASKS_ALL_KEY, task_key
from .postgres_store import PostgresTaskStore
from .redis_cache import RedisCacheStore
from .task_repository import CachedTaskRepository

__all__ = [
    "CacheStore",
    "TaskRepository",
    "TaskStore",
    "CachedTaskRepository",
    "PostgresTaskStore",
    "RedisCacheStore",
    "TASKS_ALL_KEY",
    "TASK_KEY_PREFIX",
    "task_key",
]
