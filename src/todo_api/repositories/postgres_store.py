"""PostgreSQL implementation of TaskStore.

Uses a pooled SQLAlchemy async engine (asyncpg driver). Each operation
borrows a pooled connection, runs one statement inside its own
transaction, and returns the connection to the pool.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from todo_api.config import create_engine, settings
from todo_api.entities import TaskEntity
from todo_api.exceptions import StoreError, StoreTimeoutError, TaskNotFoundError
from todo_api.repositories.models import Base, TaskModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostgresTaskStore:
    """Postgres implementation of the TaskStore protocol.

    This class satisfies the TaskStore protocol through structural
    typing - no explicit inheritance needed. It owns the engine and
    therefore the connection pool.
    """

    def __init__(
        self,
        engine: AsyncEngine | None = None,
        default_timeout: float | None = None,
    ) -> None:
        """Initialize the Postgres task store.

        Args:
            engine: Async SQLAlchemy engine. If None, creates default from settings.
            default_timeout: Deadline in seconds for calls that pass none.
        """
        self._engine = engine or create_engine()
        self._default_timeout = default_timeout or settings.store_timeout

    @classmethod
    def create(cls, default_timeout: float | None = None) -> "PostgresTaskStore":
        """Factory method to create PostgresTaskStore with defaults.

        Args:
            default_timeout: Call deadline in seconds. If None, uses settings.

        Returns:
            Configured PostgresTaskStore
        """
        return cls(default_timeout=default_timeout)

    async def _call(self, operation: str, awaitable: Awaitable[T], timeout: float | None) -> T:
        deadline = timeout if timeout is not None else self._default_timeout
        try:
            return await asyncio.wait_for(awaitable, timeout=deadline)
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(operation, deadline) from e
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"failed to {operation}: {e}", operation) from e

    async def create_schema(self) -> None:
        """Create the tasks table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Task schema ready")

    async def create_task(self, task: TaskEntity, *, timeout: float | None = None) -> TaskEntity:
        """Insert a task and return it with the store-assigned id."""

        async def run() -> TaskEntity:
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    insert(TaskModel)
                    .values(title=task.title, completed=task.completed)
                    .returning(TaskModel.id)
                )
                return task.with_id(result.scalar_one())

        return await self._call("create task", run(), timeout)

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]:
        """Return all tasks ordered by id."""

        async def run() -> list[TaskEntity]:
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    select(TaskModel.id, TaskModel.title, TaskModel.completed).order_by(TaskModel.id)
                )
                return [TaskEntity(id=row.id, title=row.title, completed=row.completed) for row in result]

        return await self._call("query tasks", run(), timeout)

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        """Return one task by id.

        Raises:
            TaskNotFoundError: If no row matches
        """

        async def run() -> TaskEntity | None:
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    select(TaskModel.id, TaskModel.title, TaskModel.completed).where(TaskModel.id == task_id)
                )
                row = result.one_or_none()
                if row is None:
                    return None
                return TaskEntity(id=row.id, title=row.title, completed=row.completed)

        task = await self._call("get task", run(), timeout)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def update_task(self, task: TaskEntity, *, timeout: float | None = None) -> None:
        """Rewrite title and completed of an existing task.

        Raises:
            TaskNotFoundError: If no row was affected
        """
        if task.id is None:
            raise ValueError("Cannot update a task without an id")

        async def run() -> int:
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    update(TaskModel)
                    .where(TaskModel.id == task.id)
                    .values(title=task.title, completed=task.completed)
                )
                return result.rowcount

        if await self._call("update task", run(), timeout) == 0:
            raise TaskNotFoundError(task.id)

    async def delete_task(self, task_id: int, *, timeout: float | None = None) -> None:
        """Delete one task by id.

        Raises:
            TaskNotFoundError: If no row was affected
        """

        async def run() -> int:
            async with self._engine.begin() as conn:
                result = await conn.execute(delete(TaskModel).where(TaskModel.id == task_id))
                return result.rowcount

        if await self._call("delete task", run(), timeout) == 0:
            raise TaskNotFoundError(task_id)

    async def health_check(self) -> bool:
        """Check if Postgres is accessible.

        Returns:
            True if healthy, False otherwise
        """

        async def run() -> None:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        try:
            await self._call("ping", run(), None)
            return True
        except StoreError:
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self._engine.dispose()

    @property
    def engine(self) -> AsyncEngine:
        """Get the underlying engine."""
        return self._engine
