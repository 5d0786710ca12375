"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateTaskRequest
from .responses import ErrorResponse, HealthCheckResponse, TaskResponse

__all__ = [
    "CreateTaskRequest",
    "ErrorResponse",
    "HealthCheckResponse",
    "TaskResponse",
]
