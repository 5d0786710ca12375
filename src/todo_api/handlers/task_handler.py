"""HTTP handlers for task operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error translation.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import HTTPException, status

from todo_api.config import settings
from todo_api.dto import CreateTaskRequest, HealthCheckResponse, TaskResponse
from todo_api.exceptions import (
    StoreError,
    StoreTimeoutError,
    TaskNotFoundError,
    TaskValidationError,
)
from todo_api.protocols import CacheStore, TaskStore
from todo_api.services import TaskService

T = TypeVar("T")


class TaskHandler:
    """HTTP handlers for task operations.

    This handler delegates use cases to TaskService and handles
    HTTP-specific concerns like:
    - Converting entities to DTOs
    - Bounding each request by a deadline
    - Mapping errors to status codes (400, 404, 500, 504)

    Example:
        ```python
        handler = TaskHandler(task_service=service, store=store, cache=cache)

        @app.get("/v1/tasks/{task_id}", response_model=TaskResponse)
        async def get_task(task_id: int):
            return await handler.get_task(task_id)
        ```
    """

    def __init__(
        self,
        task_service: TaskService,
        store: TaskStore | None = None,
        cache: CacheStore | None = None,
        request_timeout: float | None = None,
    ) -> None:
        """Initialize the task handler.

        Args:
            task_service: The task service for use cases (required).
            store: Task store, used only for health checks.
            cache: Cache backend, used only for health checks.
            request_timeout: Deadline for a whole request in seconds. Defaults to settings.
        """
        self._tasks = task_service
        self._store = store
        self._cache = cache
        self._timeout = request_timeout or settings.request_timeout

    async def _run(self, awaitable: Awaitable[T], action: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except TaskValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
        except TaskNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
        except (asyncio.TimeoutError, StoreTimeoutError) as e:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail=f"Timed out while trying to {action}",
            ) from e
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to {action}: {e.message}",
            ) from e
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to {action}: {e}",
            ) from e

    async def list_tasks(self) -> list[TaskResponse]:
        """Handle GET /v1/tasks requests."""
        tasks = await self._run(self._tasks.get_tasks(), "list tasks")
        return [TaskResponse.from_entity(t) for t in tasks]

    async def get_task(self, task_id: int) -> TaskResponse:
        """Handle GET /v1/tasks/{id} requests."""
        task = await self._run(self._tasks.get_task_by_id(task_id), "get task")
        return TaskResponse.from_entity(task)

    async def create_task(self, request: CreateTaskRequest) -> TaskResponse:
        """Handle POST /v1/tasks requests.

        Raises:
            HTTPException: 400 if the title is empty
        """
        task = await self._run(self._tasks.create_task(request.title), "create task")
        return TaskResponse.from_entity(task)

    async def toggle_task(self, task_id: int) -> TaskResponse:
        """Handle PUT /v1/tasks/{id} requests (open/close)."""
        task = await self._run(self._tasks.open_close_task(task_id), "update task")
        return TaskResponse.from_entity(task)

    async def remove_task(self, task_id: int) -> None:
        """Handle DELETE /v1/tasks/{id} requests."""
        await self._run(self._tasks.remove_task(task_id), "remove task")

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        The service is "degraded" when only the cache is down, since every
        operation still succeeds against the store.
        """
        store_healthy = await self._store.health_check() if self._store else False
        cache_healthy = await self._cache.health_check() if self._cache else False

        if store_healthy and cache_healthy:
            health = "healthy"
        elif store_healthy:
            health = "degraded"
        else:
            health = "unhealthy"

        return HealthCheckResponse(
            status=health,
            store_healthy=store_healthy,
            cache_healthy=cache_healthy,
        )
