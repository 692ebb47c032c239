"""
Task management service
"""

import uuid
from datetime import datetime
from typing import Any, Callable, List, Optional

from task_cli.models.task import Task, TaskStatus
from task_cli.services.task_repository import TaskRepository
from task_cli.services.task_validator import validate_for_create, validate_for_update, validate_task
from task_cli.utils.logger import logger


def generate_task_id() -> str:
    return str(uuid.uuid4())


class TaskService:
    """Service for managing tasks"""

    def __init__(
        self,
        repository: TaskRepository,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize task service

        Args:
            repository: Task storage
            id_factory: Supplier of unique task IDs (defaults to uuid4)
        """
        self.repository = repository
        self.id_factory = id_factory or generate_task_id
        self.logger = logger

    async def create(self, data: Any, now: Optional[datetime] = None) -> Task:
        """
        Create a new task

        The task always starts as Pending with a fresh ID, whatever the
        input contains.

        Args:
            data: Mapping (or TaskCreate) with title, description, dueDate
            now: Reference moment for the future-date rule

        Returns:
            Created task

        Raises:
            ValidationError: If the input is invalid (nothing is stored)
            StorageError: If the task file can't be written
        """
        task_data = validate_for_create(data, now=now)

        task = validate_task({
            "id": self.id_factory(),
            "title": task_data.title,
            "description": task_data.description,
            "due_date": task_data.due_date,
            "status": TaskStatus.PENDING,
        })

        await self.repository.save(task)
        self.logger.info(f"Task created: {task.id} '{task.title}'")
        return task

    async def list(self) -> List[Task]:
        """
        Get all tasks

        Returns:
            Stored tasks in storage order
        """
        return await self.repository.find_all()

    async def update(self, task_id: str, updates: Any, now: Optional[datetime] = None) -> Optional[Task]:
        """
        Update an existing task

        The task is looked up first: an unknown ID gives None even when
        the updates are invalid. Only supplied fields change. Status may
        move freely between Pending and Completed.

        Args:
            task_id: Task ID
            updates: Mapping (or TaskUpdate) with any of title, description,
                dueDate, status
            now: Reference moment for the future-date rule

        Returns:
            Updated task or None if not found

        Raises:
            ValidationError: If a supplied field of an existing task is invalid
            StorageError: If the task file can't be written
        """
        task = await self.repository.find_by_id(task_id)
        if task is None:
            self.logger.info(f"Task {task_id} not found for update")
            return None

        changes = validate_for_update(updates, now=now).changes()

        for field, value in changes.items():
            setattr(task, field, value)

        task = validate_task(task)
        await self.repository.save(task)
        self.logger.info(f"Task updated: {task_id} fields={sorted(changes)}")
        return task

    async def delete(self, task_id: str) -> bool:
        """
        Delete a task

        Args:
            task_id: Task ID

        Returns:
            True if the task existed and was deleted, False otherwise

        Raises:
            StorageError: If the task file can't be written
        """
        task = await self.repository.find_by_id(task_id)
        if task is None:
            self.logger.info(f"Task {task_id} not found for delete")
            return False

        await self.repository.delete(task_id)
        self.logger.info(f"Task deleted: {task_id}")
        return True
