"""Worker process lifecycle for the primary."""

import asyncio
import contextlib
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


class WorkerProcess(Protocol):
    """The subset of a child process the pool relies on."""

    pid: int

    async def wait(self) -> int:
        """Wait for the process to exit and return its exit code."""

    def terminate(self) -> None:
        """Ask the process to exit."""


Spawner = Callable[[int], Awaitable[WorkerProcess]]


async def spawn_worker_process(
    port: int,
    create_process: Callable[..., Awaitable[WorkerProcess]] = (
        asyncio.create_subprocess_exec
    ),
) -> WorkerProcess:
    """Start a cluster worker child bound to ``port``.

    The port travels through ``WORKER_PORT``, which is also what makes the
    child take the worker role. Children get their own session so a terminal
    interrupt reaches only the primary, which then shuts them down.
    """
    env = {**os.environ, "WORKER_PORT": str(port)}
    return await create_process(
        sys.executable,
        "-m",
        "user_cluster.main",
        "cluster",
        env=env,
        start_new_session=True,
    )


@dataclass
class WorkerPool:
    """Keeps one worker process alive per port.

    A worker that exits is replaced on the same port. The replacement starts
    with an empty store.
    """

    ports: list[int]
    spawn: Spawner = spawn_worker_process
    respawns: int = 0
    _processes: dict[int, WorkerProcess] = field(default_factory=dict)
    _supervisors: list[asyncio.Task[None]] = field(default_factory=list)
    _stopping: bool = False

    def live_ports(self) -> list[int]:
        """Return the ports whose worker process is currently running."""
        return [port for port in self.ports if port in self._processes]

    async def start(self) -> None:
        """Spawn every worker and begin supervising them."""
        self._stopping = False
        for port in self.ports:
            self._processes[port] = await self.spawn(port)
            self._supervisors.append(asyncio.create_task(self._supervise(port)))

    async def _supervise(self, port: int) -> None:
        while not self._stopping:
            process = self._processes[port]
            returncode = await process.wait()
            self._processes.pop(port, None)
            if self._stopping:
                return
            logger.warning(
                "Worker %s on port %s died with code %s", process.pid, port, returncode
            )
            try:
                self._processes[port] = await self.spawn(port)
            except OSError:
                logger.exception("Failed to respawn worker on port %s", port)
                return
            self.respawns += 1
            logger.info(
                "Respawned worker %s on port %s", self._processes[port].pid, port
            )

    async def stop(self) -> None:
        """Terminate every worker without respawning them."""
        self._stopping = True
        processes = list(self._processes.values())
        for process in processes:
            with contextlib.suppress(ProcessLookupError):
                process.terminate()
        await asyncio.gather(*(process.wait() for process in processes))
        for task in self._supervisors:
            task.cancel()
        await asyncio.gather(*self._supervisors, return_exceptions=True)
        self._supervisors.clear()
        self._processes.clear()
