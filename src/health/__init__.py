"""
Health reporting for Docker containers: runtime liveness and per-container health checks.
"""

from .health_checker import HandlerError, check_runtime_health
from .container_health import ContainerHealthCollector, HealthStatus, map_health_status

__all__ = [
    "HandlerError",
    "check_runtime_health",
    "ContainerHealthCollector",
    "HealthStatus",
    "map_health_status",
]
