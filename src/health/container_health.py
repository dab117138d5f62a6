"""
Container health collection for the Prometheus text exposition.
Lists containers, inspects each and maps engine health checks to a gauge.
"""

from enum import IntEnum
from typing import List, Optional

from docker_client import ContainerDetail, RuntimeClient, RuntimeClientError
from observability.logger import get_logger
from .health_checker import HandlerError

logger = get_logger("metrics")

METRIC_NAME = "container_state_health_status"
CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
INTERNAL_SERVER_ERROR = "internal server error"

LINE_END = "\r\n"
HEADER = (
    f"# HELP {METRIC_NAME} Docker container Health checks status (mapped as int){LINE_END}"
    f"# TYPE {METRIC_NAME} gauge{LINE_END}"
)


class HealthStatus(IntEnum):
    """Container health check status as exported."""
    NONE = 0
    STARTING = 1
    HEALTHY = 2
    UNHEALTHY = 3


def map_health_status(status: Optional[str]) -> HealthStatus:
    """Map an engine health status string to HealthStatus.

    Containers without a health check and unknown statuses both map to NONE.
    """
    if status == "starting":
        return HealthStatus.STARTING
    elif status == "healthy":
        return HealthStatus.HEALTHY
    elif status == "unhealthy":
        return HealthStatus.UNHEALTHY
    else:
        return HealthStatus.NONE


def container_health_status(detail: ContainerDetail) -> HealthStatus:
    """Health of an inspected container, NONE when state or health is absent."""
    if detail.state is None or detail.state.health is None:
        return HealthStatus.NONE
    return map_health_status(detail.state.health.status)


def format_sample(detail: ContainerDetail, status: HealthStatus) -> str:
    """One exposition line for a container."""
    name = detail.name[1:] if detail.name.startswith("/") else detail.name
    return (
        f'{METRIC_NAME}{{container_name="{name}", container_id="{detail.id}"}} '
        f'{int(status)}{LINE_END}'
    )


class ContainerHealthCollector:
    """Renders the health of every listed container, all or nothing."""

    def __init__(self, client: RuntimeClient):
        self.client = client

    def collect(self) -> str:
        """Return the full exposition document or raise HandlerError."""
        try:
            containers = self.client.list_containers()
        except RuntimeClientError as e:
            logger.error("failed to list containers", error=str(e))
            raise HandlerError(INTERNAL_SERVER_ERROR) from e

        lines: List[str] = [HEADER]

        for container in containers:
            try:
                detail = self.client.inspect(container.id)
            except RuntimeClientError as e:
                logger.error("failed to inspect container", container_id=container.id, error=str(e))
                raise HandlerError(INTERNAL_SERVER_ERROR) from e

            lines.append(format_sample(detail, container_health_status(detail)))

        return "".join(lines)
