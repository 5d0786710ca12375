"""Exceptions for the todo API.

Validation and not-found errors are client-facing conditions. Store errors
always reach the caller. Cache errors are raised by cache backends but are
caught and logged by the repository; they never reach the caller.
"""

from typing import Any


class TodoApiException(Exception):
    """Base exception for all todo API errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, task_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class TaskValidationError(TodoApiException):
    """Raised when a task fails its own validation (e.g. empty title)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class TaskNotFoundError(TodoApiException):
    """Raised when no stored task matches the identifier."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task not found: {task_id}", "TASK_NOT_FOUND", {"task_id": task_id})


class StoreError(TodoApiException):
    """Raised when the persistent store fails (connectivity, constraint, etc.)."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, "STORE_ERROR", details)


class StoreTimeoutError(StoreError):
    """Raised when a store call exceeds its deadline."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"store {operation} timed out after {timeout}s", operation)
        self.error_code = "STORE_TIMEOUT"
        self.details["timeout"] = timeout


class CacheError(TodoApiException):
    """Raised by cache backends on connectivity or protocol failure."""

    def __init__(self, message: str, key: str | None = None) -> None:
        details = {"key": key} if key else {}
        super().__init__(message, "CACHE_ERROR", details)


class CacheTimeoutError(CacheError):
    """Raised when a cache call exceeds its deadline."""

    def __init__(self, key: str, timeout: float) -> None:
        super().__init__(f"cache call for {key!r} timed out after {timeout}s", key)
        self.error_code = "CACHE_TIMEOUT"
        self.details["timeout"] = timeout
