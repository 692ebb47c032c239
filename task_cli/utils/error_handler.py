"""
Error handling utilities
"""

from pathlib import Path
from typing import Optional, Union
from task_cli.config.settings import ConfigurationError
from task_cli.models.response import ErrorResponse
from task_cli.utils.logger import logger


class TaskManagerError(Exception):
    """Base exception for task manager errors"""
    pass


class ValidationError(TaskManagerError):
    """A single field-level rule violation"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class StorageError(TaskManagerError):
    """Writing the task file failed"""
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(self.message)


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Validation and configuration problems are user errors and are not logged
    as faults; everything else is logged with its traceback.

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    if isinstance(error, ValidationError):
        logger.info(f"Validation failed ({error.field or 'input'}): {error.message}")
        return ErrorResponse(
            message=error.message,
            error_code="validation_error",
            details={"field": error.field} if error.field else None,
        )

    if isinstance(error, ConfigurationError):
        logger.error(str(error))
        return ErrorResponse(
            message=str(error),
            error_code="configuration_error",
            details={"missing": error.missing},
        )

    logger.error(f"Error occurred: {error}", exc_info=error)

    if isinstance(error, StorageError):
        return ErrorResponse(
            message=f"Storage error: {error.message}",
            error_code="storage_error",
            details={"path": error.path} if error.path else None,
        )

    # Generic error message
    return ErrorResponse(
        message=f"Unexpected error: {error}",
        error_code="internal_error",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user

    Args:
        error: Exception to format

    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message
