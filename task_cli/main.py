"""
Main application entry point

Command-line interface: add, list, update and delete tasks.
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from task_cli.config.constants import JSON_OUTPUT_INDENT, TASK_STATUSES
from task_cli.config.settings import Settings, settings
from task_cli.models.response import CommandResponse
from task_cli.services.task_repository import TaskRepository
from task_cli.services.task_service import TaskService
from task_cli.services.task_validator import validate_for_update
from task_cli.utils.error_handler import format_error_message
from task_cli.utils.formatters import (
    format_task_created,
    format_task_deleted,
    format_task_not_found,
    format_task_table,
    format_task_updated,
    format_tasks_json,
)
from task_cli.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with add/list/update/delete sub-commands"""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-j", "--json", action="store_true", help="JSON output")

    parser = argparse.ArgumentParser(prog="task-cli", description="Manage tasks stored in a local JSON file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", parents=[common], help="Add a new task")
    add_parser.add_argument("-t", "--title", help="Task title")
    add_parser.add_argument("-d", "--description", help="Task description")
    add_parser.add_argument("--due", help="Task due date (YYYY-MM-DD or ISO 8601)")

    subparsers.add_parser("list", parents=[common], help="List all tasks")

    update_parser = subparsers.add_parser("update", parents=[common], help="Update an existing task")
    update_parser.add_argument("id", help="Task ID")
    update_parser.add_argument("-t", "--title", help="New title")
    update_parser.add_argument("-d", "--description", help="New description")
    update_parser.add_argument("--due", help="New due date (YYYY-MM-DD or ISO 8601)")
    update_parser.add_argument("--status", help=f"Update status ({' or '.join(TASK_STATUSES)})")

    delete_parser = subparsers.add_parser("delete", parents=[common], help="Delete a task by ID")
    delete_parser.add_argument("id", help="Task ID")

    return parser


def _supplied(**fields: Optional[str]) -> Dict[str, Any]:
    # Only flags given on the command line; "" is a real value
    return {name: value for name, value in fields.items() if value is not None}


async def execute_command(args: argparse.Namespace, service: TaskService) -> CommandResponse:
    """
    Execute parsed command

    Args:
        args: Parsed arguments
        service: Task service

    Returns:
        Command response
    """
    if args.command == "add":
        task = await service.create(
            {"title": args.title, "description": args.description, "dueDate": args.due}
        )
        return CommandResponse(success=True, data=format_task_created(task))

    if args.command == "list":
        tasks = await service.list()
        data = format_tasks_json(tasks) if args.json else format_task_table(tasks)
        return CommandResponse(success=True, data=data)

    if not args.id or not args.id.strip():
        return CommandResponse(success=False, data="Task ID is required.")

    if args.command == "update":
        # Invalid flags are reported even for unknown IDs
        updates = validate_for_update(_supplied(
            title=args.title,
            description=args.description,
            dueDate=args.due,
            status=args.status,
        ))
        task = await service.update(args.id, updates)
        if task is None:
            return CommandResponse(success=False, data=format_task_not_found(args.id))
        return CommandResponse(success=True, data=format_task_updated(args.id))

    if args.command == "delete":
        deleted = await service.delete(args.id)
        if not deleted:
            return CommandResponse(success=False, data=format_task_not_found(args.id))
        return CommandResponse(success=True, data=format_task_deleted(args.id))

    raise ValueError(f"Unknown command: {args.command}")


def output(response: CommandResponse, as_json: bool):
    """
    Print command response

    JSON mode always prints {"success", "data"} to stdout. Otherwise results
    go to stdout and failures to stderr.
    """
    if as_json:
        print(json.dumps(response.model_dump(), indent=JSON_OUTPUT_INDENT, ensure_ascii=False))
        return

    if not response.success:
        print(response.data, file=sys.stderr)
        return

    print(response.data)


def main(argv: Optional[List[str]] = None, app_settings: Optional[Settings] = None) -> int:
    """
    Run the CLI

    Handled failures (validation, not found, storage, configuration) are
    reported in the output payload; the exit status is 0 for all of them.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        app_settings: Settings to use (defaults to the global settings)

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    app_settings = app_settings or settings

    try:
        app_settings.validate()
        service = TaskService(TaskRepository.from_settings(app_settings))
        response = asyncio.run(execute_command(args, service))
    except Exception as e:
        response = CommandResponse(success=False, data=format_error_message(e))

    logger.debug(f"Command '{args.command}' finished success={response.success}")
    output(response, args.json)
    return 0


def run():
    """Console script entry point"""
    sys.exit(main())


if __name__ == "__main__":
    run()
