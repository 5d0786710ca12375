"""Cache key builders. Single place for the key format.

List queries share one constant key; point lookups use a prefix plus the
integer id. The prefixes differ ("tasks:" vs "task:") so the two shapes
never collide.
"""

TASKS_ALL_KEY = "tasks:all"
TASK_KEY_PREFIX = "task:"


def task_key(task_id: int) -> str:
    """Cache key for a single task by id."""
    return f"{TASK_KEY_PREFIX}{int(task_id)}"
