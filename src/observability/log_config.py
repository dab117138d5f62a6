"""Log configuration management for the Docker health exporter."""

import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "text"]
LogOutput = Literal["console", "file"]

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_FORMATS = ["json", "text"]
VALID_OUTPUTS = ["console", "file"]


@dataclass
class LogConfig:
    """Configuration for logging behavior."""

    level: LogLevel = "INFO"
    format: LogFormat = "json"
    output: LogOutput = "console"
    file_path: str = "/var/log/docker-health-exporter/exporter.log"
    max_size: str = "100MB"
    backup_count: int = 5

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Create LogConfig from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=os.getenv("LOG_FORMAT", "json").lower(),
            output=os.getenv("LOG_OUTPUT", "console").lower(),
            file_path=os.getenv("LOG_FILE_PATH", "/var/log/docker-health-exporter/exporter.log"),
            max_size=os.getenv("LOG_MAX_SIZE", "100MB"),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        if self.level not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}. Must be one of {VALID_LEVELS}")

        if self.format not in VALID_FORMATS:
            raise ValueError(f"Invalid log format: {self.format}. Must be one of {VALID_FORMATS}")

        if self.output not in VALID_OUTPUTS:
            raise ValueError(f"Invalid log output: {self.output}. Must be one of {VALID_OUTPUTS}")

        if self.backup_count < 0:
            raise ValueError("Backup count must be non-negative")
