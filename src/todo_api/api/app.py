from typing import Any

from fastapi import FastAPI, Response, status

from todo_api.api.dependencies import HandlerDep, lifespan
from todo_api.config import settings
from todo_api.dto import CreateTaskRequest, ErrorResponse, HealthCheckResponse, TaskResponse

app = FastAPI(
    title="Todo API",
    description="Task CRUD service with a Redis cache-aside layer over PostgreSQL",
    version="0.1.0",
    lifespan=lifespan,
)

_ERRORS: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse},
}


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Todo API",
        "version": "0.1.0",
        "description": "Task CRUD service with a Redis cache-aside layer over PostgreSQL",
        "endpoints": {
            "tasks": "/v1/tasks",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep, response: Response) -> HealthCheckResponse:
    """Health check endpoint. Returns 503 when the store is unreachable."""
    result = await handler.health_check()
    if not result.store_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@app.get("/v1/tasks", response_model=list[TaskResponse], responses=_ERRORS)
async def list_tasks(handler: HandlerDep) -> list[TaskResponse]:
    """List all tasks."""
    return await handler.list_tasks()


@app.get("/v1/tasks/{task_id}", response_model=TaskResponse, responses=_ERRORS)
async def get_task(task_id: int, handler: HandlerDep) -> TaskResponse:
    """Get one task by id."""
    return await handler.get_task(task_id)


@app.post(
    "/v1/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_ERRORS},
)
async def create_task(request: CreateTaskRequest, handler: HandlerDep) -> TaskResponse:
    """Create a new open task."""
    return await handler.create_task(request)


@app.put("/v1/tasks/{task_id}", response_model=TaskResponse, responses=_ERRORS)
async def toggle_task(task_id: int, handler: HandlerDep) -> TaskResponse:
    """Open or close a task (flips its completed flag)."""
    return await handler.toggle_task(task_id)


@app.delete("/v1/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_ERRORS)
async def remove_task(task_id: int, handler: HandlerDep) -> Response:
    """Delete a task."""
    await handler.remove_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def run() -> None:
    """Start the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "todo_api.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    run()
