"""Task store protocol.

Defines the interface for the authoritative, durable task store.
Connection pooling belongs to the implementation.
"""

from typing import Protocol, runtime_checkable

from todo_api.entities import TaskEntity


@runtime_checkable
class TaskStore(Protocol):
    """Protocol for persistent task storage.

    Point operations raise ``TaskNotFoundError`` when no row matches;
    every other failure raises ``StoreError``.
    """

    async def create_task(self, task: TaskEntity, *, timeout: float | None = None) -> TaskEntity:
        """Insert a task and return it with the store-assigned id."""
        ...

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]:
        """Return all tasks ordered by id."""
        ...

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        """Return one task by id."""
        ...

    async def update_task(self, task: TaskEntity, *, timeout: float | None = None) -> None:
        """Rewrite the full record of an existing task."""
        ...

    async def delete_task(self, task_id: int, *, timeout: float | None = None) -> None:
        """Delete one task by id."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
