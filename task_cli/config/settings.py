"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import find_dotenv, load_dotenv
from typing import List, Optional

from task_cli.config.constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_TASKS_FILE_NAME,
    ENV_TASKS_FILE_PATH,
)

# Load environment variables from the nearest .env file (searching up from cwd)
load_dotenv(dotenv_path=find_dotenv(usecwd=True))


class ConfigurationError(ValueError):
    """Raised when required configuration is missing"""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required environment variables: {', '.join(self.missing)}"
        )


class Settings:
    """Application settings loaded from environment variables"""

    def __init__(self):
        # Storage
        self.TASKS_FILE_PATH: str = os.getenv(ENV_TASKS_FILE_PATH, "")
        self.TASKS_FILE_NAME: str = os.getenv(ENV_TASKS_FILE_NAME, "")

        # Application
        self.LOG_LEVEL: str = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)
        self.LOG_FILE: Optional[str] = os.getenv(ENV_LOG_FILE) or None

    @property
    def tasks_dir(self) -> Path:
        """Base directory of the task file; relative paths live under the home directory"""
        return Path.home() / Path(self.TASKS_FILE_PATH).expanduser()

    @property
    def tasks_file(self) -> Path:
        """Full path of the task file"""
        return self.tasks_dir / self.TASKS_FILE_NAME

    def validate(self) -> bool:
        """
        Validate that all required settings are present

        Returns:
            True when the configuration is complete

        Raises:
            ConfigurationError: If a required environment variable is missing
        """
        required = {
            ENV_TASKS_FILE_PATH: self.TASKS_FILE_PATH,
            ENV_TASKS_FILE_NAME: self.TASKS_FILE_NAME,
        }

        missing: List[str] = [name for name, value in required.items() if not value.strip()]

        if missing:
            raise ConfigurationError(missing)

        return True


# Global settings instance
settings = Settings()
