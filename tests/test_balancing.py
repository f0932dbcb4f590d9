"""Tests for worker selection strategies."""

import random

import pytest

from user_cluster.domain.errors import UpstreamProxyError
from user_cluster.services.balancing import (
    RandomSelector,
    RoundRobinSelector,
    build_selector,
)


def test_random_selector_only_picks_given_ports() -> None:
    selector = RandomSelector(rng=random.Random(7))
    ports = [4001, 4002, 4003]

    picks = {selector.choose(ports) for _ in range(200)}

    assert picks == set(ports)


def test_random_selector_is_reproducible_with_seed() -> None:
    ports = [4001, 4002, 4003]
    first = RandomSelector(rng=random.Random(42))
    second = RandomSelector(rng=random.Random(42))

    assert [first.choose(ports) for _ in range(10)] == [
        second.choose(ports) for _ in range(10)
    ]


def test_round_robin_selector_cycles() -> None:
    selector = RoundRobinSelector()

    picks = [selector.choose([4001, 4002]) for _ in range(5)]

    assert picks == [4001, 4002, 4001, 4002, 4001]


@pytest.mark.parametrize("selector", [RandomSelector(), RoundRobinSelector()])
def test_selectors_fail_without_live_ports(selector) -> None:
    with pytest.raises(UpstreamProxyError):
        selector.choose([])


def test_build_selector_by_name() -> None:
    assert isinstance(build_selector("random"), RandomSelector)
    assert isinstance(build_selector(" Round_Robin "), RoundRobinSelector)


def test_build_selector_rejects_unknown_name() -> None:
    with pytest.raises(ValueError, match="consistent_hash"):
        build_selector("consistent_hash")


def test_round_robin_selector_always_starts_at_first_port() -> None:
    with pytest.raises(TypeError):
        RoundRobinSelector(5)  # type: ignore[call-arg]

    assert RoundRobinSelector().choose([4001, 4002]) == 4001
