"""
Tests for task repository
"""

import json
import pytest
from datetime import datetime, timezone
from unittest.mock import patch
from task_cli.models.task import TaskStatus
from task_cli.services.task_repository import TaskRepository
from task_cli.utils.error_handler import StorageError


def test_repository_creates_base_directory(tasks_file):
    """Test that the base directory (with parents) is created up front"""
    nested = tasks_file.parent / "a" / "b" / "tasks.json"
    assert not nested.parent.exists()

    TaskRepository(nested)

    assert nested.parent.is_dir()
    assert not nested.exists()


def test_repository_from_settings(tmp_path):
    """Test building repository from settings"""
    class FakeSettings:
        tasks_file = tmp_path / "store" / "tasks.json"

    repository = TaskRepository.from_settings(FakeSettings())
    assert repository.tasks_file == tmp_path / "store" / "tasks.json"
    assert (tmp_path / "store").is_dir()


@pytest.mark.asyncio
async def test_find_all_missing_file_returns_empty(task_repository):
    """Test fresh environment starts with zero tasks"""
    assert await task_repository.find_all() == []


@pytest.mark.asyncio
async def test_find_all_empty_file_returns_empty(task_repository, tasks_file):
    """Test empty file counts as no data"""
    tasks_file.write_text("")
    assert await task_repository.find_all() == []


@pytest.mark.asyncio
async def test_find_all_malformed_file_returns_empty(task_repository, tasks_file, caplog):
    """Test corrupt content counts as no data and is logged"""
    tasks_file.write_text("{not json")

    with caplog.at_level("WARNING"):
        assert await task_repository.find_all() == []

    assert "malformed" in caplog.text


@pytest.mark.asyncio
async def test_find_all_undecodable_file_returns_empty(task_repository, tasks_file, caplog):
    """Test bytes that are not UTF-8 count as no data and are logged"""
    tasks_file.write_bytes(b"\xff\xfe\x00[{\x80}]")

    with caplog.at_level("WARNING"):
        assert await task_repository.find_all() == []

    assert "Failed to read" in caplog.text


@pytest.mark.asyncio
async def test_find_all_wrong_document_shape_returns_empty(task_repository, tasks_file):
    """Test a JSON object instead of an array counts as no data"""
    tasks_file.write_text(json.dumps({"id": "task-1"}))
    assert await task_repository.find_all() == []


@pytest.mark.asyncio
async def test_save_and_find_by_id_round_trip(task_repository, make_task):
    """Test that a saved task is returned equal in every field"""
    task = make_task(description="")

    await task_repository.save(task)
    found = await task_repository.find_by_id(task.id)

    assert found == task
    assert found.description == ""
    assert found is not task


@pytest.mark.asyncio
async def test_save_without_description_round_trip(task_repository, make_task):
    """Test that an absent description stays absent"""
    task = make_task(description=None)

    await task_repository.save(task)
    found = await task_repository.find_by_id(task.id)

    assert found == task
    assert found.description is None


@pytest.mark.asyncio
async def test_save_appends_in_order(task_repository, make_task):
    """Test that new tasks are appended"""
    await task_repository.save(make_task(id="task-1", title="Task 1 to List"))
    await task_repository.save(make_task(id="task-2", title="Task 2 to List"))

    tasks = await task_repository.find_all()
    assert [t.title for t in tasks] == ["Task 1 to List", "Task 2 to List"]


@pytest.mark.asyncio
async def test_save_replaces_existing_task(task_repository, make_task):
    """Test that saving an existing id replaces it in place"""
    await task_repository.save(make_task(id="task-1"))
    await task_repository.save(make_task(id="task-2"))
    await task_repository.save(make_task(id="task-1", title="Replaced", status=TaskStatus.COMPLETED))

    tasks = await task_repository.find_all()
    assert [t.id for t in tasks] == ["task-1", "task-2"]
    assert tasks[0].title == "Replaced"
    assert tasks[0].status == TaskStatus.COMPLETED


@pytest.mark.asyncio
async def test_find_by_id_missing_returns_none(task_repository, make_task):
    """Test that absence is a normal outcome"""
    await task_repository.save(make_task(id="task-1"))
    assert await task_repository.find_by_id("unknown") is None


@pytest.mark.asyncio
async def test_delete_removes_task(task_repository, make_task):
    """Test deleting a task"""
    await task_repository.save(make_task(id="task-1"))
    await task_repository.save(make_task(id="task-2"))

    await task_repository.delete("task-1")

    tasks = await task_repository.find_all()
    assert [t.id for t in tasks] == ["task-2"]


@pytest.mark.asyncio
async def test_delete_unknown_id_is_noop(task_repository, make_task):
    """Test deleting a non-existent id leaves the collection unchanged"""
    await task_repository.save(make_task(id="task-1"))

    await task_repository.delete("unknown")
    await task_repository.delete("unknown")

    assert [t.id for t in await task_repository.find_all()] == ["task-1"]


@pytest.mark.asyncio
async def test_file_format(task_repository, tasks_file, make_task):
    """Test the stored document layout"""
    due = datetime(2030, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    await task_repository.save(make_task(id="task-1", description=None, due_date=due))

    data = json.loads(tasks_file.read_text(encoding="utf-8"))
    assert data == [
        {
            "id": "task-1",
            "title": "Test Task",
            "dueDate": "2030-01-02T03:04:05.678Z",
            "status": "Pending",
        }
    ]


@pytest.mark.asyncio
async def test_reads_past_due_dates(task_repository, tasks_file):
    """Test that stored tasks are not re-checked against the current time"""
    tasks_file.write_text(json.dumps([
        {"id": "old", "title": "Old task", "dueDate": "2001-01-01T00:00:00.000Z", "status": "Completed"}
    ]))

    task = await task_repository.find_by_id("old")
    assert task is not None
    assert task.status == TaskStatus.COMPLETED


@pytest.mark.asyncio
async def test_write_leaves_no_temporary_files(task_repository, tasks_file, make_task):
    """Test atomic write cleans up after itself"""
    await task_repository.save(make_task())
    await task_repository.delete("task-1")

    assert [p.name for p in tasks_file.parent.iterdir()] == ["tasks.json"]


@pytest.mark.asyncio
async def test_write_failure_raises_storage_error(task_repository, tasks_file, make_task):
    """Test that write failures propagate and keep the old file intact"""
    await task_repository.save(make_task(id="task-1"))
    before = tasks_file.read_text(encoding="utf-8")

    with patch("task_cli.services.task_repository.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(StorageError) as exc_info:
            await task_repository.save(make_task(id="task-2"))

    assert "disk full" in str(exc_info.value)
    assert exc_info.value.path == str(tasks_file)
    assert tasks_file.read_text(encoding="utf-8") == before
    assert [p.name for p in tasks_file.parent.iterdir()] == ["tasks.json"]
