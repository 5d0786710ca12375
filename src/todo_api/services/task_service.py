"""Task service for use-case orchestration.

This service translates use cases (create, list, get, open/close, remove)
into repository calls. It owns no caching logic; that lives in the
repository.
"""

import logging

from todo_api.entities import TaskEntity
from todo_api.protocols import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    """Task use cases on top of a TaskRepository.

    This service depends on the TaskRepository PROTOCOL, not on the
    cache-aside implementation, so it can be exercised against any
    repository.

    Example:
        ```python
        service = TaskService.create(
            repository=CachedTaskRepository.create(store=store, cache=cache),
        )
        task = await service.create_task("Buy milk")
        await service.open_close_task(task.id)
        ```
    """

    def __init__(self, repository: TaskRepository) -> None:
        """Initialize the task service.

        Args:
            repository: Task data access (required).
        """
        self._repository = repository

    @classmethod
    def create(cls, repository: TaskRepository) -> "TaskService":
        """Factory method to create TaskService."""
        return cls(repository=repository)

    async def create_task(self, title: str, *, timeout: float | None = None) -> TaskEntity:
        """Create a new open task.

        The task is validated before the repository is touched.

        Args:
            title: Non-empty task title
            timeout: Deadline in seconds for each backend call

        Returns:
            The created task with its store-assigned id

        Raises:
            TaskValidationError: If the title is empty
        """
        logger.info("creating new task: %r", title)

        task = TaskEntity(id=None, title=title)
        task.validate()

        try:
            created = await self._repository.create_task(task, timeout=timeout)
        except Exception as e:
            logger.error("failed to create task: %s", e)
            raise

        logger.info("task %s created successfully", created.id)
        return created

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]:
        """Return all tasks."""
        logger.info("getting all tasks")

        try:
            tasks = await self._repository.get_tasks(timeout=timeout)
        except Exception as e:
            logger.error("failed to get tasks: %s", e)
            raise

        logger.info("%d tasks retrieved successfully", len(tasks))
        return tasks

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        """Return one task.

        Raises:
            TaskNotFoundError: If no such task exists
        """
        logger.info("getting task by id %s", task_id)

        try:
            task = await self._repository.get_task_by_id(task_id, timeout=timeout)
        except Exception as e:
            logger.error("failed to get task %s: %s", task_id, e)
            raise

        logger.info("task %s retrieved successfully", task_id)
        return task

    async def open_close_task(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        """Flip the completed flag of a task.

        Read-modify-write: fetch (cache-aside), flip, full update. Not
        atomic; two concurrent toggles of the same task may collapse
        into a single flip.

        Returns:
            The task as written

        Raises:
            TaskNotFoundError: If no such task exists
        """
        logger.info("toggling task %s", task_id)

        try:
            task = await self._repository.get_task_by_id(task_id, timeout=timeout)
        except Exception as e:
            logger.error("failed to get task %s: %s", task_id, e)
            raise

        toggled = task.toggled()

        try:
            await self._repository.update_task(toggled, timeout=timeout)
        except Exception as e:
            logger.error("failed to update task %s: %s", task_id, e)
            raise

        logger.info("task %s updated successfully (completed=%s)", task_id, toggled.completed)
        return toggled

    async def remove_task(self, task_id: int, *, timeout: float | None = None) -> None:
        """Delete a task.

        Raises:
            TaskNotFoundError: If no such task exists
        """
        logger.info("removing task %s", task_id)

        try:
            await self._repository.delete_task(task_id, timeout=timeout)
        except Exception as e:
            logger.error("failed to remove task %s: %s", task_id, e)
            raise

        logger.info("task %s removed successfully", task_id)

    @property
    def repository(self) -> TaskRepository:
        """Get the underlying repository (for testing)."""
        return self._repository
