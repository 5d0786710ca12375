"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CreateTaskRequest(BaseModel):
    """Request DTO for creating a task.

    The title is not length-checked here; an empty title is rejected by
    the task entity's own validation in the service layer.
    """

    title: str = Field(..., description="The task title (must not be empty)")
