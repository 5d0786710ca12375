"""Dependency wiring for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Components built in dependency order during lifespan
    - Dependency functions retrieve from request.app.state
    - Resources released in reverse order on shutdown
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from todo_api.config import settings
from todo_api.handlers import TaskHandler
from todo_api.repositories import CachedTaskRepository, PostgresTaskStore, RedisCacheStore
from todo_api.services import TaskService
from todo_api.utils import setup_logging

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> TaskHandler:
    """Dependency injection for TaskHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "task_handler", None)
    if handler is None:
        raise RuntimeError("TaskHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Builds every layer explicitly, in dependency order:
    1. Store (Postgres, owns the connection pool)
    2. Cache (Redis)
    3. Repository (cache-aside over store + cache)
    4. Service (use cases)
    5. Handler (HTTP) - the only component kept in app.state

    Cleanup:
        Closes the Redis client and disposes the engine on shutdown
    """
    setup_logging(settings.log_level)

    store = PostgresTaskStore.create()
    if settings.db_create_schema:
        await store.create_schema()

    cache = RedisCacheStore.create()
    if not await cache.health_check():
        # Startup continues; every read falls through to the store until Redis is back.
        logger.warning("Redis at %s is unreachable, serving from the store only", settings.redis_url)

    repository = CachedTaskRepository.create(store=store, cache=cache)
    task_service = TaskService.create(repository=repository)
    task_handler = TaskHandler(task_service=task_service, store=store, cache=cache)

    app.state.task_handler = task_handler

    logger.info("Task service initialized (cache TTL %ss)", repository.ttl)

    try:
        yield
    finally:
        del app.state.task_handler
        await cache.close()
        await store.dispose()
        logger.info("Task service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[TaskHandler, Depends(get_handler)]