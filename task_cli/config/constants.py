"""
Application constants
"""

# Task rules
TASK_TITLE_MIN_LENGTH = 3
TASK_STATUS_PENDING = "Pending"
TASK_STATUS_COMPLETED = "Completed"
TASK_STATUSES = (TASK_STATUS_PENDING, TASK_STATUS_COMPLETED)

# Storage
STORAGE_JSON_INDENT = 2
STORAGE_ENCODING = "utf-8"
STORAGE_TMP_SUFFIX = ".tmp"

# Dates are stored in UTC with millisecond precision, e.g. 2025-11-05T00:00:00.000Z
STORAGE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Environment variables
ENV_TASKS_FILE_PATH = "TASKS_FILE_PATH"
ENV_TASKS_FILE_NAME = "TASKS_FILE_NAME"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FILE = "LOG_FILE"

# Logging
LOGGER_NAME = "task_cli"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# CLI output
JSON_OUTPUT_INDENT = 2
