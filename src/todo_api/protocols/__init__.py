"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → Memcached, Postgres → SQLite, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from todo_api.protocols import CacheStore, TaskStore

    # Type hints work with any implementation
    cache: CacheStore = RedisCacheStore(client)
    store: TaskStore = PostgresTaskStore(engine)
    ```
"""

from .cache_store import CacheStore
from .task_repository import TaskRepository
from .task_store import TaskStore

__all__ = [
    "CacheStore",
    "TaskRepository",
    "TaskStore",
]
