"""Task repository protocol.

The contract the service layer depends on. The default implementation
is the cache-aside ``CachedTaskRepository``, but a plain store satisfies
it as well.
"""

from typing import Protocol, runtime_checkable

from todo_api.entities import TaskEntity


@runtime_checkable
class TaskRepository(Protocol):
    """Protocol for task data access used by ``TaskService``."""

    async def create_task(self, task: TaskEntity, *, timeout: float | None = None) -> TaskEntity: ...

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]: ...

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity: ...

    async def update_task(self, task: TaskEntity, *, timeout: float | None = None) -> None: ...

    async def delete_task(self, task_id: int, *, timeout: float | None = None) -> None: ...
