"""
Tests for the todo API.
"""

import asyncio
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from todo_api.api import dependencies
from todo_api.api.app import app
from todo_api.entities import TaskEntity
from todo_api.exceptions import StoreError, StoreTimeoutError
from todo_api.handlers import TaskHandler
from todo_api.repositories import TASKS_ALL_KEY, CachedTaskRepository, task_key
from todo_api.services import TaskService


@pytest.fixture
def client(store, cache):
    """Create a test client wired to in-memory backends.

    The client is not used as a context manager, so the lifespan (which
    connects to Postgres and Redis) does not run.
    """
    service = TaskService(CachedTaskRepository(store=store, cache=cache))
    app.state.task_handler = TaskHandler(task_service=service, store=store, cache=cache)
    yield TestClient(app)
    del app.state.task_handler


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Todo API"


def test_create_and_list(client):
    response = client.post("/v1/tasks", json={"title": "Buy milk"})
    assert response.status_code == 201
    created = response.json()
    assert created == {"id": 1, "title": "Buy milk", "completed": False}

    response = client.get("/v1/tasks")
    assert response.status_code == 200
    assert response.json() == [created]


def test_create_empty_title_is_bad_request(client, store):
    response = client.post("/v1/tasks", json={"title": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "title is required"
    assert store.calls == []


def test_create_without_title_is_unprocessable(client):
    response = client.post("/v1/tasks", json={})
    assert response.status_code == 422


def test_get_task(client):
    client.post("/v1/tasks", json={"title": "a"})

    response = client.get("/v1/tasks/1")
    assert response.status_code == 200
    assert response.json()["title"] == "a"


def test_get_missing_task(client):
    response = client.get("/v1/tasks/404")
    assert response.status_code == 404
    assert response.json()["detail"] == "task not found: 404"


def test_non_integer_id(client):
    response = client.get("/v1/tasks/abc")
    assert response.status_code == 422


def test_toggle_task(client):
    client.post("/v1/tasks", json={"title": "a"})

    response = client.put("/v1/tasks/1")
    assert response.status_code == 200
    assert response.json()["completed"] is True

    response = client.put("/v1/tasks/1")
    assert response.json()["completed"] is False


def test_toggle_missing_task(client):
    assert client.put("/v1/tasks/7").status_code == 404


def test_delete_task(client):
    client.post("/v1/tasks", json={"title": "a"})

    response = client.delete("/v1/tasks/1")
    assert response.status_code == 204
    assert client.get("/v1/tasks/1").status_code == 404
    assert client.delete("/v1/tasks/1").status_code == 404


def test_store_failure_is_server_error(client, store):
    store.fail_with = StoreError("connection reset", "query")

    response = client.get("/v1/tasks")
    assert response.status_code == 500
    assert "connection reset" in response.json()["detail"]


def test_store_timeout_is_gateway_timeout(client, store):
    store.fail_with = StoreTimeoutError("query tasks", 5.0)

    assert client.get("/v1/tasks").status_code == 504


def test_cache_down_is_invisible(client, cache):
    cache.fail = True

    assert client.post("/v1/tasks", json={"title": "a"}).status_code == 201
    assert client.get("/v1/tasks").json()[0]["title"] == "a"
    assert client.put("/v1/tasks/1").json()["completed"] is True
    assert client.delete("/v1/tasks/1").status_code == 204


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "store_healthy": True, "cache_healthy": True}


def test_health_degraded_without_cache(client, cache):
    cache.fail = True

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


def test_health_unhealthy_without_store(client, store):
    store.healthy = False

    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_handler_request_deadline():
    class SlowService:
        async def get_tasks(self):
            await asyncio.sleep(1)

    handler = TaskHandler(task_service=SlowService(), request_timeout=0.01)

    with pytest.raises(HTTPException) as exc_info:
        await handler.list_tasks()

    assert exc_info.value.status_code == 504


def test_missing_handler_raises():
    with pytest.raises(RuntimeError, match="TaskHandler not initialized"):
        TestClient(app).get("/v1/tasks")


@pytest.mark.asyncio
async def test_request_deadline_after_store_write_still_invalidates(store, cache):
    store.rows[1] = TaskEntity(id=1, title="a")
    service = TaskService(CachedTaskRepository(store=store, cache=cache))
    await service.get_task_by_id(1)
    await service.get_tasks()

    delete = cache.delete

    async def slow_delete(key, *, timeout=None):
        await asyncio.sleep(0.05)
        await delete(key, timeout=timeout)

    cache.delete = slow_delete
    handler = TaskHandler(task_service=service, request_timeout=0.02)

    with pytest.raises(HTTPException) as exc_info:
        await handler.toggle_task(1)

    assert exc_info.value.status_code == 504
    assert store.rows[1].completed is True
    assert not cache.has(task_key(1))
    assert not cache.has(TASKS_ALL_KEY)
    assert (await service.get_task_by_id(1)).completed is True
    assert (await service.get_tasks())[0].completed is True


def test_lifespan_wires_handler_and_releases_backends(monkeypatch, store, cache):
    monkeypatch.setattr(dependencies, "PostgresTaskStore", SimpleNamespace(create=lambda: store))
    monkeypatch.setattr(dependencies, "RedisCacheStore", SimpleNamespace(create=lambda: cache))

    with TestClient(app) as client:
        assert client.post("/v1/tasks", json={"title": "a"}).status_code == 201
        assert isinstance(app.state.task_handler, TaskHandler)
        assert not hasattr(app.state, "task_service")
        assert not hasattr(app.state, "store")

    assert store.schema_created is True
    assert store.disposed is True
    assert cache.closed is True
    assert not hasattr(app.state, "task_handler")
