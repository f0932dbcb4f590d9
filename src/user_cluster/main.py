"""Command-line entry point for the user service."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import typer

from user_cluster import cluster as runners
from user_cluster.config import Settings

app = typer.Typer(help="In-memory user CRUD service", no_args_is_help=True)


@dataclass
class Runners:
    """Process entry points the commands hand their settings to."""

    run_standalone: Callable[[Settings], None] = runners.run_standalone
    run_cluster: Callable[[Settings], None] = runners.run_cluster


def _settings(port: int | None = None, workers: int | None = None) -> Settings:
    overrides: dict[str, object] = {}
    if port is not None:
        overrides["port"] = port
    if workers is not None:
        overrides["workers"] = workers
    return Settings(**overrides)


@app.command()
def serve(
    ctx: typer.Context,
    port: int | None = typer.Option(
        None, "--port", "-p", help="Port to listen on (defaults to PORT or 4000)"
    ),
) -> None:
    """Run one worker directly on the base port, without a dispatcher."""
    ctx.obj.run_standalone(_settings(port=port))


@app.command()
def cluster(
    ctx: typer.Context,
    port: int | None = typer.Option(
        None, "--port", "-p", help="Dispatcher port (defaults to PORT or 4000)"
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Worker count (defaults to CPU count - 1)"
    ),
) -> None:
    """Run the dispatcher and its workers, or a worker when WORKER_PORT is set."""
    ctx.obj.run_cluster(_settings(port=port, workers=workers))


def main(argv: Sequence[str] | None = None, entry_points: Runners | None = None) -> int:
    return app(
        args=list(argv) if argv is not None else None,
        obj=entry_points or Runners(),
        standalone_mode=False,
    )


if __name__ == "__main__":
    main()
