"""Dependency container wiring for the application."""

import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from user_cluster.adapters.worker_proxy import HttpxWorkerProxy, WorkerProxy
from user_cluster.config import Settings, resolve_worker_count, worker_ports
from user_cluster.services.balancing import TargetSelector, build_selector
from user_cluster.services.store import InMemoryRecordStore
from user_cluster.services.users import UserService
from user_cluster.services.workers import Spawner, WorkerPool, spawn_worker_process


@dataclass
class AppContainer:
    """Holds the dependencies of a single worker."""

    settings: Settings
    user_service: UserService


@dataclass
class ProxyContainer:
    """Holds the dependencies of the primary's dispatcher."""

    settings: Settings
    pool: WorkerPool
    selector: TargetSelector
    worker_proxy: WorkerProxy
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create a worker container with its own empty record store."""
    resolved_settings = settings or Settings()
    user_service = UserService(InMemoryRecordStore())
    return AppContainer(settings=resolved_settings, user_service=user_service)


def build_proxy_container(
    settings: Settings | None = None,
    spawn: Spawner = spawn_worker_process,
) -> ProxyContainer:
    """Create the dispatcher container and lay out the worker ports."""
    resolved_settings = settings or Settings()
    count = resolve_worker_count(resolved_settings.workers, os.cpu_count())
    pool = WorkerPool(
        ports=worker_ports(resolved_settings.port, count),
        spawn=spawn,
    )
    selector = build_selector(resolved_settings.balancing_strategy)
    worker_proxy = HttpxWorkerProxy.create(resolved_settings.host)

    async def close_resources() -> None:
        await worker_proxy.close()

    return ProxyContainer(
        settings=resolved_settings,
        pool=pool,
        selector=selector,
        worker_proxy=worker_proxy,
        close_resources=close_resources,
    )
