"""
Container runtime client for the exporter.
Wraps the low-level Docker SDK API client behind ping/list/inspect.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import docker
from docker.constants import DEFAULT_DOCKER_API_VERSION
from docker.errors import DockerException
from requests.exceptions import RequestException

from observability.logger import get_logger

logger = get_logger("docker_client")


class RuntimeClientError(Exception):
    """A container runtime API call failed."""


@dataclass
class ContainerRef:
    """Container identifier as returned by the list operation."""
    id: str


@dataclass
class ContainerHealth:
    """Engine health check state of a container."""
    status: str


@dataclass
class ContainerState:
    """Runtime state of a container; health is absent without a health check."""
    health: Optional[ContainerHealth] = None


@dataclass
class ContainerDetail:
    """Inspection result of a single container."""
    id: str
    name: str
    state: Optional[ContainerState] = None

    @classmethod
    def from_inspect(cls, attrs: Dict[str, Any]) -> "ContainerDetail":
        """Build from the Docker inspect payload."""
        state = None
        raw_state = attrs.get("State")
        if raw_state is not None:
            health = None
            raw_health = raw_state.get("Health")
            if raw_health is not None:
                health = ContainerHealth(status=raw_health.get("Status", ""))
            state = ContainerState(health=health)

        return cls(
            id=attrs.get("Id", ""),
            name=attrs.get("Name", ""),
            state=state,
        )


class RuntimeClient:
    """Docker Engine client exposing the calls the exporter needs."""

    def __init__(self, raw_client: Any):
        self._client = raw_client

    @classmethod
    def from_env(cls) -> "RuntimeClient":
        """Create a client from DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH and DOCKER_API_VERSION.

        A pinned API version keeps construction from contacting the daemon.
        """
        version = os.getenv("DOCKER_API_VERSION") or DEFAULT_DOCKER_API_VERSION
        try:
            client = docker.from_env(version=version)
        except DockerException as e:
            raise RuntimeClientError(str(e)) from e
        return cls(client.api)

    def get_raw_client(self) -> Any:
        """Return the underlying low-level API client."""
        return self._client

    def ping(self) -> None:
        """Check that the runtime answers."""
        try:
            self._client.ping()
        except (DockerException, RequestException) as e:
            raise RuntimeClientError(str(e)) from e

    def list_containers(self) -> List[ContainerRef]:
        """List containers with the runtime's default filters."""
        try:
            containers = self._client.containers()
        except (DockerException, RequestException) as e:
            raise RuntimeClientError(str(e)) from e
        return [ContainerRef(id=container["Id"]) for container in containers]

    def inspect(self, container_id: str) -> ContainerDetail:
        """Fetch the full inspection detail of one container."""
        try:
            attrs = self._client.inspect_container(container_id)
        except (DockerException, RequestException) as e:
            raise RuntimeClientError(str(e)) from e
        return ContainerDetail.from_inspect(attrs)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        try:
            self._client.close()
        except (DockerException, RequestException) as e:
            logger.warning("Error closing docker client", error=str(e))
