"""Shared fixtures: fakes wired into a repository and a service."""

import pytest

from todo_api.repositories import CachedTaskRepository
from todo_api.services import TaskService

from .fakes import FakeCacheStore, FakeTaskStore


@pytest.fixture
def store() -> FakeTaskStore:
    return FakeTaskStore()


@pytest.fixture
def cache() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def repository(store: FakeTaskStore, cache: FakeCacheStore) -> CachedTaskRepository:
    return CachedTaskRepository(store=store, cache=cache, ttl=300)


@pytest.fixture
def service(repository: CachedTaskRepository) -> TaskService:
    return TaskService(repository=repository)
