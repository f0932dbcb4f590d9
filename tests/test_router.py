"""Tests for route resolution."""

import pytest

from user_cluster.api.users import RouteMatch, match_route


@pytest.mark.parametrize(
    ("method", "path", "expected"),
    [
        ("GET", "/api/users", RouteMatch("list_users")),
        ("POST", "/api/users", RouteMatch("create_user")),
        ("GET", "/api/users/abc-123", RouteMatch("get_user", "abc-123")),
        ("PUT", "/api/users/abc-123", RouteMatch("update_user", "abc-123")),
        ("DELETE", "/api/users/abc-123", RouteMatch("delete_user", "abc-123")),
        ("get", "/api/users/invalid-uuid", RouteMatch("get_user", "invalid-uuid")),
    ],
)
def test_match_route_finds_handler(
    method: str, path: str, expected: RouteMatch
) -> None:
    assert match_route(method, path) == expected


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("DELETE", "/api/users"),
        ("PATCH", "/api/users/abc"),
        ("POST", "/api/users/abc"),
        ("GET", "/api/users/"),
        ("GET", "/api/users/abc/def"),
        ("GET", "/api/users/abc_def"),
        ("GET", "/api/user"),
        ("GET", "/"),
    ],
)
def test_match_route_misses(method: str, path: str) -> None:
    assert match_route(method, path) is None
