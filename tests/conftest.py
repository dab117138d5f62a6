"""Shared fixtures: fake runtime clients so tests never need a Docker daemon."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from docker_client import (
    ContainerDetail,
    ContainerHealth,
    ContainerRef,
    ContainerState,
    RuntimeClientError,
)
from http_server import create_app
from observability import reset_logging


def make_detail(container_id: str, name: str, health: Optional[str] = None, state: bool = True) -> ContainerDetail:
    if not state:
        return ContainerDetail(id=container_id, name=name, state=None)
    container_health = ContainerHealth(status=health) if health is not None else None
    return ContainerDetail(id=container_id, name=name, state=ContainerState(health=container_health))


class FakeRuntimeClient:
    """In-memory runtime client recording the calls made against it."""

    def __init__(
        self,
        details: Optional[List[ContainerDetail]] = None,
        ping_ok: bool = True,
        list_ok: bool = True,
        failing_ids: Optional[set] = None,
        list_ids: Optional[List[str]] = None,
    ) -> None:
        self.details: Dict[str, ContainerDetail] = {}
        self.order: List[str] = []
        for index, detail in enumerate(details or []):
            ref_id = list_ids[index] if list_ids else detail.id
            self.details[ref_id] = detail
            self.order.append(ref_id)
        self.ping_ok = ping_ok
        self.list_ok = list_ok
        self.failing_ids = failing_ids or set()
        self.inspected: List[str] = []
        self.closed = False

    def ping(self) -> None:
        if not self.ping_ok:
            raise RuntimeClientError("Cannot connect to the Docker daemon")

    def list_containers(self) -> List[ContainerRef]:
        if not self.list_ok:
            raise RuntimeClientError("list failed")
        return [ContainerRef(id=ref_id) for ref_id in self.order]

    def inspect(self, container_id: str) -> ContainerDetail:
        self.inspected.append(container_id)
        if container_id in self.failing_ids:
            raise RuntimeClientError(f"No such container: {container_id}")
        return self.details[container_id]

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def fake_client() -> FakeRuntimeClient:
    return FakeRuntimeClient(
        details=[
            make_detail("abc", "/app1", health="healthy"),
            make_detail("def", "nolead"),
        ]
    )


@pytest.fixture
def client_factory():
    def factory(runtime_client, base_url: str = "") -> TestClient:
        return TestClient(create_app(runtime_client, base_url))

    return factory
