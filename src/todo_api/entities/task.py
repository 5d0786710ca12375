"""Task domain entity."""

from dataclasses import dataclass, replace

from todo_api.exceptions import TaskValidationError


@dataclass(frozen=True)
class TaskEntity:
    """Domain entity for a single task.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        id: Store-assigned identifier, None until the task is persisted
        title: Non-empty task title, fixed after creation
        completed: Whether the task is closed
    """

    id: int | None
    title: str
    completed: bool = False

    def validate(self) -> None:
        """Check the task before it reaches the store.

        Raises:
            TaskValidationError: If the title is empty
        """
        if self.title == "":
            raise TaskValidationError("title is required", field="title")

    def toggled(self) -> "TaskEntity":
        """Return a copy with ``completed`` flipped."""
        return replace(self, completed=not self.completed)

    def with_id(self, task_id: int) -> "TaskEntity":
        """Return a copy carrying the store-assigned identifier."""
        return replace(self, id=task_id)
