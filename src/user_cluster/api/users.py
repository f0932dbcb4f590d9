"""User CRUD endpoints and the route table that dispatches to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from starlette.convertors import Convertor, register_url_convertor
from starlette.routing import Match

if TYPE_CHECKING:
    from user_cluster.containers import AppContainer


class UserTokenConvertor(Convertor):
    """Path segment of letters, digits and hyphens, passed through verbatim."""

    regex = "[a-zA-Z0-9-]+"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return value


register_url_convertor("user_token", UserTokenConvertor())

router = APIRouter(prefix="/api/users", tags=["users"])


@dataclass(frozen=True)
class RouteMatch:
    """A resolved route and the id token captured from the path, if any."""

    name: str
    user_id: str | None = None


def match_route(method: str, path: str) -> RouteMatch | None:
    """Return the user route handling ``method`` and ``path``, if any."""
    scope = {"type": "http", "method": method.upper(), "path": path, "root_path": ""}
    for route in router.routes:
        match, child_scope = route.matches(scope)
        if match is Match.FULL:
            return RouteMatch(
                name=route.name,
                user_id=child_scope.get("path_params", {}).get("user_id"),
            )
    return None


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("", name="list_users")
async def list_users(request: Request) -> list[dict[str, object]]:
    """Return every user held by this worker."""
    users = _container(request).user_service.list_users()
    return [user.to_dict() for user in users]


@router.post("", name="create_user", status_code=status.HTTP_201_CREATED)
async def create_user(request: Request) -> dict[str, object]:
    """Create a user from the JSON body."""
    body = await request.body()
    return _container(request).user_service.create_user(body).to_dict()


@router.get("/{user_id:user_token}", name="get_user")
async def get_user(user_id: str, request: Request) -> dict[str, object]:
    """Return a single user."""
    return _container(request).user_service.get_user(user_id).to_dict()


@router.put("/{user_id:user_token}", name="update_user")
async def update_user(user_id: str, request: Request) -> dict[str, object]:
    """Replace a user's fields with the JSON body."""
    body = await request.body()
    return _container(request).user_service.update_user(user_id, body).to_dict()


@router.delete(
    "/{user_id:user_token}",
    name="delete_user",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_user(user_id: str, request: Request) -> Response:
    """Delete a user."""
    _container(request).user_service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
