"""
Task models

Task is the persisted record; TaskCreate and TaskUpdate describe user input.
All three share the same field rules. Only the input models require the due
date to be in the future: a stored task whose due date has passed is still a
valid record.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Optional
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic_core import PydanticCustomError

from task_cli.config.constants import (
    TASK_STATUS_COMPLETED,
    TASK_STATUS_PENDING,
    TASK_STATUSES,
    TASK_TITLE_MIN_LENGTH,
)
from task_cli.utils.date_parser import parse_date
from task_cli.utils.date_utils import format_datetime, get_current_datetime, to_utc


class TaskStatus(str, Enum):
    """Task status"""
    PENDING = TASK_STATUS_PENDING
    COMPLETED = TASK_STATUS_COMPLETED


# ---- shared field rules ----

def check_title(value: Any) -> str:
    if value is None:
        raise PydanticCustomError("title_required", "Title is required")
    if not isinstance(value, str):
        raise PydanticCustomError("title_type", "Title must be a string")
    if len(value) < TASK_TITLE_MIN_LENGTH:
        raise PydanticCustomError(
            "title_too_short",
            "Title must be at least {min_length} characters",
            {"min_length": TASK_TITLE_MIN_LENGTH},
        )
    return value


def check_description(value: Any) -> Optional[str]:
    # "" is a real value and must survive untouched
    if value is not None and not isinstance(value, str):
        raise PydanticCustomError("description_type", "Description must be a string")
    return value


def _context_now(info: ValidationInfo) -> Optional[datetime]:
    return (info.context or {}).get("now")


def check_due_date(value: Any, info: ValidationInfo) -> datetime:
    if value is None:
        raise PydanticCustomError("due_date_required", "Due date is required")
    parsed = parse_date(value, now=_context_now(info))
    if parsed is None:
        raise PydanticCustomError("invalid_date", "Invalid date")
    return parsed


def check_due_date_in_future(value: datetime, info: ValidationInfo) -> datetime:
    now = _context_now(info) or get_current_datetime()
    if value <= to_utc(now):
        raise PydanticCustomError("due_date_past", "Due date must be in the future")
    return value


def check_status(value: Any) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    if value not in TASK_STATUSES:
        raise PydanticCustomError(
            "invalid_status",
            "Status must be one of: {allowed}",
            {"allowed": ", ".join(TASK_STATUSES)},
        )
    return TaskStatus(value)


def _optional(check):
    def check_if_given(value: Any) -> Any:
        return None if value is None else check(value)
    return check_if_given


def check_optional_due_date(value: Any, info: ValidationInfo) -> Optional[datetime]:
    return None if value is None else check_due_date(value, info)


def check_optional_due_date_in_future(value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
    return None if value is None else check_due_date_in_future(value, info)


Title = Annotated[str, BeforeValidator(check_title)]
Description = Annotated[Optional[str], BeforeValidator(check_description)]
DueDate = Annotated[datetime, BeforeValidator(check_due_date)]
FutureDueDate = Annotated[datetime, BeforeValidator(check_due_date), AfterValidator(check_due_date_in_future)]
Status = Annotated[TaskStatus, BeforeValidator(check_status)]


# ---- models ----

class Task(BaseModel):
    """Task model"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: Title
    description: Description = None
    due_date: DueDate = Field(alias="dueDate")
    status: Status

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise PydanticCustomError("id_required", "Id is required")
        return value

    @field_serializer("due_date")
    def _serialize_due_date(self, value: datetime) -> str:
        return format_datetime(value)

    def to_record(self) -> Dict[str, Any]:
        """Storage/JSON representation: camelCase keys, absent description omitted"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreate(BaseModel):
    """Task creation model (id and status are assigned by the service)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Title
    description: Description = None
    due_date: FutureDueDate = Field(alias="dueDate")


class TaskUpdate(BaseModel):
    """Task update model; only supplied fields are applied"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Annotated[Optional[str], BeforeValidator(_optional(check_title))] = None
    description: Description = None
    due_date: Annotated[
        Optional[datetime],
        BeforeValidator(check_optional_due_date),
        AfterValidator(check_optional_due_date_in_future),
    ] = Field(None, alias="dueDate")
    status: Annotated[Optional[TaskStatus], BeforeValidator(_optional(check_status))] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually supplied; None means "leave unchanged" """
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
