"""
Liveness probe of the container runtime.
"""

from docker_client import RuntimeClient, RuntimeClientError
from observability.logger import get_logger

logger = get_logger("health")

HEALTH_OK = "ok"
HEALTH_NOK = "nok"


class HandlerError(Exception):
    """Failure reported by a handler; the message is written as the 500 body."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def check_runtime_health(client: RuntimeClient) -> str:
    """Ping the runtime; return "ok" or raise HandlerError("nok")."""
    try:
        client.ping()
    except RuntimeClientError as e:
        logger.debug("Runtime ping failed", error=str(e))
        raise HandlerError(HEALTH_NOK) from e

    return HEALTH_OK
