"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from todo_api.entities import TaskEntity


class TaskResponse(BaseModel):
    """Single task as returned by the API."""

    id: int = Field(..., description="Store-assigned task identifier")
    title: str = Field(..., description="The task title")
    completed: bool = Field(..., description="Whether the task is closed")

    @classmethod
    def from_entity(cls, task: TaskEntity) -> "TaskResponse":
        return cls(id=task.id, title=task.title, completed=task.completed)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy', 'degraded' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the task store is reachable")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")


class ErrorResponse(BaseModel):
    """Body of an error response."""

    detail: str = Field(..., description="Human-readable error message")
