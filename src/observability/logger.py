"""Structured logging for the Docker health exporter."""

import logging
import logging.handlers
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

SERVICE_NAME = 'docker-health-exporter'

# Request context tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
http_method: ContextVar[Optional[str]] = ContextVar('http_method', default=None)
http_path: ContextVar[Optional[str]] = ContextVar('http_path', default=None)

_logger_configured = False
_handler: Optional[logging.Handler] = None


def add_context_fields(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add request context fields to log entries."""
    event_dict['service'] = SERVICE_NAME
    req_id = request_id.get()
    if req_id:
        event_dict['request_id'] = req_id
        event_dict['http_method'] = http_method.get()
        event_dict['http_path'] = http_path.get()
    return event_dict


def add_performance_fields(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add millisecond timing if a duration is present."""
    if 'duration' in event_dict:
        duration = event_dict['duration']
        if isinstance(duration, (int, float)):
            event_dict['duration_ms'] = round(duration * 1000, 2)
    return event_dict


def setup_logging(
    level: str = 'INFO',
    format_type: str = 'json',
    output_type: str = 'console',
    file_path: str = '/var/log/docker-health-exporter/exporter.log',
    max_size: str = '100MB',
    backup_count: int = 5
) -> None:
    """Set up structured logging configuration."""
    global _logger_configured, _handler

    if _logger_configured:
        return

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_context_fields,
        add_performance_fields,
    ]

    if format_type == 'json':
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if output_type == 'file':
        log_dir = Path(file_path).parent
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            file_path,
            maxBytes=_parse_size(max_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
    else:
        handler = logging.StreamHandler(sys.stdout)

    # structlog renders the message, stdlib only writes it
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    _handler = handler

    _logger_configured = True


def reset_logging() -> None:
    """Drop the structlog configuration so setup_logging can run again."""
    global _logger_configured, _handler

    structlog.reset_defaults()
    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler.close()
        _handler = None
    _logger_configured = False


def _parse_size(size_str: str) -> int:
    """Parse size string like '100MB' into bytes."""
    size_str = size_str.upper().strip()
    if size_str.endswith('KB'):
        return int(size_str[:-2]) * 1024
    elif size_str.endswith('MB'):
        return int(size_str[:-2]) * 1024 * 1024
    elif size_str.endswith('GB'):
        return int(size_str[:-2]) * 1024 * 1024 * 1024
    else:
        return int(size_str)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the specified name."""
    return structlog.get_logger(f'docker_health_exporter.{name}')


def set_request_context(
    req_id: Optional[str] = None,
    method: Optional[str] = None,
    path: Optional[str] = None
) -> str:
    """Set request context for logging correlation."""
    if not req_id:
        req_id = str(uuid.uuid4())

    request_id.set(req_id)
    if method:
        http_method.set(method)
    if path:
        http_path.set(path)

    return req_id


def clear_request_context() -> None:
    """Clear the current request context."""
    request_id.set(None)
    http_method.set(None)
    http_path.set(None)
