"""
Task validation

Thin layer over the pydantic task models that turns pydantic's aggregated
errors into a single ValidationError naming the first failing field.
"""

from datetime import datetime
from typing import Any, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError as PydanticValidationError

from task_cli.models.task import Task, TaskCreate, TaskUpdate
from task_cli.utils.error_handler import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

REQUIRED_MESSAGES = {
    "id": "Id is required",
    "title": "Title is required",
    "due_date": "Due date is required",
    "status": "Status is required",
}

# pydantic reports locations by alias
FIELD_NAMES = {
    "dueDate": "due_date",
}


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Keep only the first error (fields are checked in declaration order)"""
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = FIELD_NAMES.get(str(loc[0]), str(loc[0])) if loc else None

    if error["type"] == "missing" and field:
        message = REQUIRED_MESSAGES.get(field, f"{field} is required")
    elif not loc:
        message = "Task data must be an object"
    else:
        message = error["msg"]

    return ValidationError(message, field=field)


def _validate(model: Type[ModelT], data: Any, now: Optional[datetime] = None) -> ModelT:
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    try:
        return model.model_validate(data, context={"now": now})
    except PydanticValidationError as exc:
        raise _to_validation_error(exc) from exc


def validate_for_create(data: Any, now: Optional[datetime] = None) -> TaskCreate:
    """
    Validate input for a new task

    Requires a title of at least 3 characters and a parseable due date
    strictly later than now. Any id or status in the input is ignored.

    Args:
        data: Mapping with title, description (optional) and dueDate/due_date
        now: Reference moment for the future-date rule (defaults to current time)

    Returns:
        Validated TaskCreate

    Raises:
        ValidationError: On the first violated rule
    """
    return _validate(TaskCreate, data, now)


def validate_for_update(data: Any, now: Optional[datetime] = None) -> TaskUpdate:
    """
    Validate a partial update

    Every field is optional; supplied fields follow the create rules
    (a supplied due date must still be in the future).

    Raises:
        ValidationError: On the first violated rule
    """
    return _validate(TaskUpdate, data, now)


def validate_task(data: Any) -> Task:
    """
    Validate a complete task record

    Checks the record shape only; a due date in the past is accepted here.

    Raises:
        ValidationError: On the first violated rule
    """
    if isinstance(data, Task):
        data = data.model_dump(by_alias=True)
    return _validate(Task, data)
