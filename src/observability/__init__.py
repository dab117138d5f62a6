"""Docker Health Exporter Observability Package.

Structured logging for the exporter.

Components:
- logger: structlog setup with request context fields
- log_config: Environment-based logging configuration
- log_context: Request correlation and context management
"""

from .logger import (
    get_logger,
    set_request_context,
    clear_request_context,
    setup_logging,
    reset_logging
)
from .log_config import LogConfig
from .log_context import RequestContext, get_current_request_id

__all__ = [
    'get_logger',
    'set_request_context',
    'clear_request_context',
    'setup_logging',
    'reset_logging',
    'LogConfig',
    'RequestContext',
    'get_current_request_id'
]
