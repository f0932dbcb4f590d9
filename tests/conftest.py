"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from user_cluster.api.app import create_app
from user_cluster.config import Settings
from user_cluster.containers import AppContainer, build_container

JOHN = {"username": "John Doe", "age": 30, "hobbies": ["reading", "gaming"]}


@dataclass
class FakeWorkerProcess:
    """Child process stand-in that exits when told to."""

    pid: int
    terminated: bool = False
    _exited: asyncio.Event = field(default_factory=asyncio.Event)
    _returncode: int = 0

    async def wait(self) -> int:
        await self._exited.wait()
        return self._returncode

    def terminate(self) -> None:
        self.terminated = True
        self.exit(-15)

    def exit(self, returncode: int) -> None:
        self._returncode = returncode
        self._exited.set()


@dataclass
class FakeSpawner:
    """Records spawned ports and hands out fake processes."""

    spawned: list[tuple[int, FakeWorkerProcess]] = field(default_factory=list)

    async def __call__(self, port: int) -> FakeWorkerProcess:
        process = FakeWorkerProcess(pid=1000 + len(self.spawned))
        self.spawned.append((port, process))
        return process

    def ports(self) -> list[int]:
        return [port for port, _ in self.spawned]

    def latest(self, port: int) -> FakeWorkerProcess:
        return [process for spawned, process in self.spawned if spawned == port][-1]


@pytest.fixture
def settings() -> Settings:
    return Settings(port=4000, workers=2)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
