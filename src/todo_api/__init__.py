"""Todo API - task CRUD with a cache-aside layer.

This package provides a layered architecture for a small task service:

Layers:
    - protocols: Interface contracts (CacheStore, TaskStore, TaskRepository)
    - repositories: Redis cache, Postgres store, cache-aside repository
    - services: Use cases
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from todo_api.repositories import CachedTaskRepository, PostgresTaskStore, RedisCacheStore
    from todo_api.services import TaskService

    repository = CachedTaskRepository.create(
        store=PostgresTaskStore.create(),
        cache=RedisCacheStore.create(),
    )
    service = TaskService.create(repository=repository)
    ```

For HTTP API:
    ```python
    from todo_api.api.app import app
    ```
"""

from todo_api.config import get_redis_client, settings
from todo_api.dto import CreateTaskRequest, TaskResponse
from todo_api.entities import TaskEntity
from todo_api.exceptions import (
    CacheError,
    StoreError,
    TaskNotFoundError,
    TaskValidationError,
    TodoApiException,
)
from todo_api.handlers import TaskHandler
from todo_api.protocols import CacheStore, TaskRepository, TaskStore
from todo_api.repositories import CachedTaskRepository, PostgresTaskStore, RedisCacheStore
from todo_api.services import TaskService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "TaskRepository",
    "TaskStore",
    # Services (use cases)
    "TaskService",
    # Handlers (HTTP)
    "TaskHandler",
    # Repositories (data access)
    "CachedTaskRepository",
    "PostgresTaskStore",
    "RedisCacheStore",
    # Entities (domain models)
    "TaskEntity",
    # DTOs (API contracts)
    "CreateTaskRequest",
    "TaskResponse",
    # Errors
    "TodoApiException",
    "TaskValidationError",
    "TaskNotFoundError",
    "StoreError",
    "CacheError",
]
