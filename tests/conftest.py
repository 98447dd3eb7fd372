import os

import pytest
from fastapi.testclient import TestClient

# Keep the module-level app independent of the developer's environment
os.environ.setdefault("SEED_EXAMPLE_TASKS", "true")

from task_tracker.dispatcher import TaskDispatcher  # noqa: E402
from task_tracker.main import create_app  # noqa: E402
from task_tracker.repositories import InMemoryTaskRepository, get_repository  # noqa: E402


@pytest.fixture
def repo() -> InMemoryTaskRepository:
    """A fresh store holding the four example tasks."""
    return get_repository(seed=True)  # type: ignore[return-value]


@pytest.fixture
def empty_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def dispatcher(repo) -> TaskDispatcher:
    return TaskDispatcher(repo)


@pytest.fixture
def client(repo) -> TestClient:
    return TestClient(create_app(repository=repo))
