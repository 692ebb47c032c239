"""
Pytest configuration and fixtures
"""

import itertools
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from task_cli.models.task import Task, TaskStatus
from task_cli.services.task_repository import TaskRepository
from task_cli.services.task_service import TaskService


@pytest.fixture
def now():
    """Fixed reference moment for validation"""
    return datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def tomorrow():
    """Due date one day after the real current time (millisecond precision)"""
    value = datetime.now(timezone.utc) + timedelta(days=1)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


@pytest.fixture
def make_task(tomorrow):
    """Factory for valid Task records"""
    def _make_task(**overrides):
        fields = {
            "id": "task-1",
            "title": "Test Task",
            "description": "Test description",
            "due_date": tomorrow,
            "status": TaskStatus.PENDING,
        }
        fields.update(overrides)
        return Task(**fields)
    return _make_task


@pytest.fixture
def tasks_file(tmp_path):
    """Task file path inside a directory that does not exist yet"""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def task_repository(tasks_file):
    """Task repository with temporary file"""
    return TaskRepository(tasks_file)


@pytest.fixture
def id_factory():
    """Deterministic task IDs: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def task_service(task_repository, id_factory):
    """Task service backed by a real repository on a temporary file"""
    return TaskService(task_repository, id_factory=id_factory)


@pytest.fixture
def mock_task_repository():
    """Mock task repository"""
    repository = MagicMock(spec=TaskRepository)
    repository.save = AsyncMock(return_value=None)
    repository.find_all = AsyncMock(return_value=[])
    repository.find_by_id = AsyncMock(return_value=None)
    repository.delete = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def mocked_task_service(mock_task_repository):
    """Task service with mocked repository and a fixed ID"""
    return TaskService(mock_task_repository, id_factory=lambda: "mocked-uuid")
