"""Parsing and validation of user request bodies."""

import json
from typing import Annotated

from pydantic import (
    AllowInfNan,
    BaseModel,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from user_cluster.domain.errors import InvalidPayload, MalformedBody


def _reject_constant(name: str) -> object:
    raise ValueError(f"{name} is not valid JSON")


class UserPayload(BaseModel):
    """Body accepted by the create and update endpoints."""

    username: StrictStr = Field(min_length=1)
    age: StrictInt | Annotated[StrictFloat, AllowInfNan(False)]
    hobbies: list[StrictStr]


def parse_user_payload(body: bytes) -> UserPayload:
    """Decode a raw request body into a validated user payload.

    Raises MalformedBody when the body is not JSON and InvalidPayload when it
    is JSON of the wrong shape.
    """
    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedBody() from exc
    if not isinstance(data, dict):
        raise InvalidPayload()
    try:
        return UserPayload.model_validate(data)
    except ValidationError as exc:
        raise InvalidPayload() from exc
