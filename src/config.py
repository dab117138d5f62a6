"""
Configuration for the Docker health exporter.
"""

import argparse
import os
from typing import Optional, Dict, Any, Sequence
from dataclasses import dataclass

# Server always binds all interfaces on a fixed port
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

DOCKER_ENV_KEYS = ["DOCKER_HOST", "DOCKER_TLS_VERIFY", "DOCKER_CERT_PATH", "DOCKER_API_VERSION"]
LOG_ENV_KEYS = ["LOG_LEVEL", "LOG_FORMAT", "LOG_OUTPUT", "LOG_FILE_PATH", "LOG_MAX_SIZE", "LOG_BACKUP_COUNT"]


@dataclass
class ExporterConfig:
    """Configuration for the exporter HTTP server."""
    base_url: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    def route(self, path: str) -> str:
        """Full route for a handler path such as '/metrics'."""
        return f"{self.base_url}{path}"


def normalize_base_url(value: Optional[str]) -> str:
    """Normalize a URL prefix to one leading '/' and no trailing '/'.

    An empty value stays empty so routes are mounted at the root. A value made
    only of slashes collapses to the empty prefix as well.
    """
    if not value:
        return ""
    trimmed = value.strip("/")
    if not trimmed:
        return ""
    return "/" + trimmed


def build_parser() -> argparse.ArgumentParser:
    """Command line parser; environment variables provide the defaults."""
    parser = argparse.ArgumentParser(description="Docker container health exporter for Prometheus")
    parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", ""),
        help="URL prefix for HTTP server (env: BASE_URL)"
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (env: LOG_LEVEL)"
    )
    return parser


def load_config(argv: Optional[Sequence[str]] = None) -> ExporterConfig:
    """Load exporter configuration from command line flags and environment variables."""
    args = build_parser().parse_args(argv)

    return ExporterConfig(
        base_url=normalize_base_url(args.base_url),
        log_level=args.log_level,
    )


def get_env_variables() -> Dict[str, Any]:
    """Get all relevant environment variables for debugging."""
    env_vars = {"BASE_URL": os.getenv("BASE_URL")}

    # Docker client configuration
    for key in DOCKER_ENV_KEYS:
        env_vars[key] = os.getenv(key)

    # Logging
    for key in LOG_ENV_KEYS:
        env_vars[key] = os.getenv(key)

    return env_vars
