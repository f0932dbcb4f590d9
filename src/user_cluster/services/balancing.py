"""Worker selection strategies for the dispatcher."""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from user_cluster.domain.errors import UpstreamProxyError


class TargetSelector(Protocol):
    """Picks the worker port that receives the next request."""

    def choose(self, ports: Sequence[int]) -> int:
        """Return one of the given ports."""


@dataclass
class RandomSelector(TargetSelector):
    """Uniform random choice over the live ports."""

    rng: random.Random = field(default_factory=random.Random)

    def choose(self, ports: Sequence[int]) -> int:
        """Return a port chosen uniformly at random."""
        if not ports:
            raise UpstreamProxyError("No live workers to forward to")
        return self.rng.choice(ports)


@dataclass
class RoundRobinSelector(TargetSelector):
    """Cycles through the live ports in order."""

    _counter: int = field(default=0, init=False)

    def choose(self, ports: Sequence[int]) -> int:
        """Return the next port in rotation."""
        if not ports:
            raise UpstreamProxyError("No live workers to forward to")
        port = ports[self._counter % len(ports)]
        self._counter += 1
        return port


_STRATEGIES: dict[str, type[RandomSelector] | type[RoundRobinSelector]] = {
    "random": RandomSelector,
    "round_robin": RoundRobinSelector,
}


def build_selector(strategy: str) -> TargetSelector:
    """Create the selector registered under a strategy name."""
    try:
        selector_cls = _STRATEGIES[strategy.strip().lower()]
    except KeyError as exc:
        known = ", ".join(sorted(_STRATEGIES))
        raise ValueError(
            f"Unknown balancing strategy {strategy!r}; expected one of: {known}"
        ) from exc
    return selector_cls()
