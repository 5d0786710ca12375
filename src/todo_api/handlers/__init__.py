"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (use cases), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Use cases) -> (Cache-aside data access)
"""

from .task_handler import TaskHandler

__all__ = [
    "TaskHandler",
]
