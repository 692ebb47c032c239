"""
Message formatting utilities
"""

from typing import Any, Dict, List
from task_cli.models.task import Task

TABLE_COLUMNS = ["id", "title", "description", "dueDate", "status"]


def format_task_created(task: Task) -> str:
    """
    Format task creation confirmation message

    Args:
        task: Created task

    Returns:
        Formatted message (the ID is the last token so scripts can pick it up)
    """
    return f"Task Created: {task.id}"


def format_task_updated(task_id: str) -> str:
    return f"Task {task_id} updated."


def format_task_deleted(task_id: str) -> str:
    return f"Task {task_id} deleted."


def format_task_not_found(task_id: str) -> str:
    return f"Task {task_id} not found."


def format_tasks_json(tasks: List[Task]) -> List[Dict[str, Any]]:
    """Tasks as JSON-ready records (same shape as the task file)"""
    return [task.to_record() for task in tasks]


def format_task_table(tasks: List[Task]) -> str:
    """
    Format tasks as a plain text table

    Args:
        tasks: Tasks to show

    Returns:
        Table with one row per task, or a short notice for an empty list
    """
    if not tasks:
        return "No tasks found."

    rows = [
        [str(record.get(column, "")) for column in TABLE_COLUMNS]
        for record in format_tasks_json(tasks)
    ]
    widths = [
        max(len(column), *(len(row[i]) for row in rows))
        for i, column in enumerate(TABLE_COLUMNS)
    ]

    def render(cells: List[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [render(TABLE_COLUMNS), "-+-".join("-" * width for width in widths)]
    lines.extend(render(row) for row in rows)
    return "\n".join(lines)
