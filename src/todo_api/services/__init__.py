"""Service layer for business logic.

This layer contains the use-case orchestration. Services depend on
protocols (interfaces), not concrete implementations, making them
testable and flexible.

Architecture:
    Handler -> Service -> Repository -> {Cache, Store}
    (HTTP)  -> (Use cases) -> (Cache-aside) -> (Redis, Postgres)

Usage:
    ```python
    from todo_api.services import TaskService

    service = TaskService.create(repository=repository)
    ```
"""

from .task_service import TaskService

__all__ = [
    "TaskService",
]
