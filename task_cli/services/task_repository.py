"""
File-backed task repository
"""

import asyncio
import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from task_cli.config.constants import STORAGE_ENCODING, STORAGE_JSON_INDENT, STORAGE_TMP_SUFFIX
from task_cli.models.task import Task
from task_cli.utils.error_handler import StorageError
from task_cli.utils.logger import logger

_TASK_LIST = TypeAdapter(List[Task])


class TaskRepository:
    """
    Repository keeping the whole task collection in a single JSON file

    Every operation reads the full collection; mutations write the full
    collection back. Writes go to a temporary file that is then renamed over
    the target, so readers never see a half-written file. There is no
    cross-process locking: two invocations racing on the same file can lose
    one of the updates.
    """

    def __init__(self, tasks_file: Union[str, Path]):
        """
        Initialize task repository

        Args:
            tasks_file: Path to the JSON file holding the collection
        """
        self.tasks_file = Path(tasks_file)
        self.logger = logger
        # Ensure directory exists
        self.tasks_file.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings) -> "TaskRepository":
        """Build the repository from validated settings"""
        return cls(settings.tasks_file)

    def _load_tasks(self) -> List[Task]:
        """
        Load the collection from file

        A missing, empty, unreadable or malformed file counts as an empty
        collection. Corruption is logged but not raised; the next write will
        replace the corrupt content.
        """
        try:
            raw = self.tasks_file.read_text(encoding=STORAGE_ENCODING)
        except FileNotFoundError:
            self.logger.debug(f"Task file {self.tasks_file} does not exist yet")
            return []
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Failed to read task file {self.tasks_file}: {e}. Treating as empty.")
            return []

        if not raw.strip():
            self.logger.debug(f"Task file {self.tasks_file} is empty")
            return []

        try:
            tasks = _TASK_LIST.validate_json(raw)
        except PydanticValidationError as e:
            self.logger.warning(
                f"Task file {self.tasks_file} is malformed ({e.error_count()} errors). Treating as empty."
            )
            return []

        self.logger.debug(f"Loaded {len(tasks)} tasks from {self.tasks_file}")
        return tasks

    def _write_tasks(self, tasks: List[Task]):
        """Write the collection atomically (temporary file + rename)"""
        payload = json.dumps(
            [task.to_record() for task in tasks],
            ensure_ascii=False,
            indent=STORAGE_JSON_INDENT,
        )

        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.tasks_file.parent,
                prefix=f".{self.tasks_file.name}.",
                suffix=STORAGE_TMP_SUFFIX,
            )
            with os.fdopen(fd, "w", encoding=STORAGE_ENCODING) as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.tasks_file)
        except OSError as e:
            if tmp_name:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageError(f"Failed to write {self.tasks_file}: {e}", path=self.tasks_file) from e

        self.logger.debug(f"Wrote {len(tasks)} tasks to {self.tasks_file}")

    async def find_all(self) -> List[Task]:
        """
        Get all tasks

        Returns:
            Tasks in file order (empty list when there is no usable data)
        """
        return await asyncio.to_thread(self._load_tasks)

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """
        Get task by ID

        Args:
            task_id: Task ID

        Returns:
            Task or None if not found
        """
        tasks = await self.find_all()
        return next((task for task in tasks if task.id == task_id), None)

    async def save(self, task: Task):
        """
        Insert or replace a task

        Replaces the entry with the same id, otherwise appends, then rewrites
        the whole file.

        Args:
            task: Task to save

        Raises:
            StorageError: If the file can't be written
        """
        tasks = await self.find_all()

        for index, existing in enumerate(tasks):
            if existing.id == task.id:
                tasks[index] = task
                break
        else:
            tasks.append(task)

        await asyncio.to_thread(self._write_tasks, tasks)

    async def delete(self, task_id: str):
        """
        Delete task by ID (no-op when the id is unknown)

        Args:
            task_id: Task ID

        Raises:
            StorageError: If the file can't be written
        """
        tasks = await self.find_all()
        remaining = [task for task in tasks if task.id != task_id]
        await asyncio.to_thread(self._write_tasks, remaining)
