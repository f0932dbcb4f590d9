"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    port: int = 4000
    worker_port: int | None = None
    workers: int | None = None
    host: str = "localhost"
    balancing_strategy: str = "random"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_worker(self) -> bool:
        """Return True when this process was spawned as a cluster worker."""
        return self.worker_port is not None


def resolve_worker_count(workers: int | None, cpu_count: int | None) -> int:
    """Return how many workers the primary should spawn.

    An explicit ``workers`` value wins; otherwise one worker per CPU is used,
    leaving one CPU for the primary. At least one worker is always spawned.
    """
    if workers is not None:
        return max(workers, 1)
    return max((cpu_count or 1) - 1, 1)


def worker_ports(base_port: int, count: int) -> list[int]:
    """Return the sequential worker ports following the base port."""
    return [base_port + offset for offset in range(1, count + 1)]
