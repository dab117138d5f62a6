"""Request correlation and context management for the exporter."""

import time
from typing import Optional

from .logger import get_logger, set_request_context, clear_request_context, request_id


class RequestContext:
    """Binds an HTTP request's correlation fields for the duration of the request."""

    def __init__(self, request_id: Optional[str] = None, method: Optional[str] = None,
                 path: Optional[str] = None):
        self.request_id = request_id
        self.method = method
        self.path = path
        self.start_time = time.time()
        self.logger = get_logger('request')

    def __enter__(self):
        self.request_id = set_request_context(
            req_id=self.request_id,
            method=self.method,
            path=self.path
        )
        self.logger.debug("Request started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time

        if exc_type:
            self.logger.error(
                "Request failed",
                duration=duration,
                error_type=exc_type.__name__,
                error_message=str(exc_val) if exc_val else None,
                exc_info=True
            )
        else:
            self.logger.debug("Request completed", duration=duration)

        clear_request_context()


def get_current_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id.get()
