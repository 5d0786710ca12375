"""In-memory fakes for the store and cache ports."""

from __future__ import annotations

from dataclasses import dataclass, field

from todo_api.entities import TaskEntity
from todo_api.exceptions import CacheError, StoreError, TaskNotFoundError


@dataclass
class FakeTaskStore:
    """Dict-backed TaskStore that counts calls per operation.

    Set ``fail_with`` to make every operation raise that exception.
    """

    rows: dict[int, TaskEntity] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail_with: Exception | None = None
    healthy: bool = True
    schema_created: bool = False
    disposed: bool = False
    _next_id: int = 1

    def _record(self, op: str) -> None:
        self.calls.append(op)
        if self.fail_with is not None:
            raise self.fail_with

    def count(self, op: str) -> int:
        return self.calls.count(op)

    async def create_task(self, task: TaskEntity, *, timeout: float | None = None) -> TaskEntity:
        self._record("create_task")
        created = task.with_id(self._next_id)
        self._next_id += 1
        self.rows[created.id] = created
        return created

    async def get_tasks(self, *, timeout: float | None = None) -> list[TaskEntity]:
        self._record("get_tasks")
        return [self.rows[k] for k in sorted(self.rows)]

    async def get_task_by_id(self, task_id: int, *, timeout: float | None = None) -> TaskEntity:
        self._record("get_task_by_id")
        if task_id not in self.rows:
            raise TaskNotFoundError(task_id)
        return self.rows[task_id]

    async def update_task(self, task: TaskEntity, *, timeout: float | None = None) -> None:
        self._record("update_task")
        if task.id not in self.rows:
            raise TaskNotFoundError(task.id)
        self.rows[task.id] = task

    async def delete_task(self, task_id: int, *, timeout: float | None = None) -> None:
        self._record("delete_task")
        if task_id not in self.rows:
            raise TaskNotFoundError(task_id)
        del self.rows[task_id]

    async def health_check(self) -> bool:
        return self.healthy

    async def create_schema(self) -> None:
        self.schema_created = True

    async def dispose(self) -> None:
        self.disposed = True


@dataclass
class FakeCacheStore:
    """Dict-backed CacheStore with a manual clock for TTL expiry.

    ``ops`` records every call as ``(op, key)`` in order. Set ``fail``
    to make every call raise CacheError, as an unreachable backend would.
    """

    entries: dict[str, tuple[bytes, float]] = field(default_factory=dict)
    ops: list[tuple[str, str]] = field(default_factory=list)
    now: float = 0.0
    fail: bool = False
    closed: bool = False

    def _record(self, op: str, key: str) -> None:
        self.ops.append((op, key))
        if self.fail:
            raise CacheError("connection refused", key)

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def put(self, key: str, value: bytes, ttl: int = 300) -> None:
        self.entries[key] = (value, self.now + ttl)

    def has(self, key: str) -> bool:
        entry = self.entries.get(key)
        return entry is not None and entry[1] > self.now

    async def get(self, key: str, *, timeout: float | None = None) -> bytes | None:
        self._record("get", key)
        entry = self.entries.get(key)
        if entry is None or entry[1] <= self.now:
            self.entries.pop(key, None)
            return None
        return entry[0]

    async def set(self, key: str, value: bytes, ttl: int, *, timeout: float | None = None) -> None:
        self._record("set", key)
        self.put(key, value, ttl)

    async def delete(self, key: str, *, timeout: float | None = None) -> None:
        self._record("delete", key)
        self.entries.pop(key, None)

    async def health_check(self) -> bool:
        return not self.fail

    async def close(self) -> None:
        self.closed = True


def broken_store() -> FakeTaskStore:
    """A store whose every call fails like a dropped connection."""
    return FakeTaskStore(fail_with=StoreError("connection reset", "query"))
