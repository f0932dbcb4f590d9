"""User CRUD business logic."""

import re
from dataclasses import dataclass
from uuid import UUID, uuid4

from user_cluster.domain.errors import InvalidIdentifier, NotFound
from user_cluster.domain.models import UserRecord
from user_cluster.domain.payloads import UserPayload, parse_user_payload
from user_cluster.services.store import RecordStore

# Version 1-8 with the RFC 4122 variant, plus the nil and max UUIDs.
_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-8][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
    r"|00000000-0000-0000-0000-000000000000"
    r"|ffffffff-ffff-ffff-ffff-ffffffffffff",
    re.IGNORECASE,
)


def parse_user_id(raw_id: str) -> UUID:
    """Return the UUID for a well-formed id token or raise InvalidIdentifier."""
    if not _UUID_PATTERN.fullmatch(raw_id):
        raise InvalidIdentifier()
    return UUID(raw_id)


@dataclass
class UserService:
    """Application service for user CRUD operations.

    Every method is synchronous: callers must read the full request body
    before calling in, so a check and the mutation that depends on it never
    straddle an await.
    """

    store: RecordStore

    def list_users(self) -> list[UserRecord]:
        """Return all users held by this worker."""
        return self.store.list()

    def get_user(self, raw_id: str) -> UserRecord:
        """Return a single user by id."""
        return self._require(parse_user_id(raw_id))

    def create_user(self, body: bytes) -> UserRecord:
        """Validate a body and store it as a new user with a fresh id."""
        payload = parse_user_payload(body)
        record = _build_record(uuid4(), payload)
        self.store.put(record.id, record)
        return record

    def update_user(self, raw_id: str, body: bytes) -> UserRecord:
        """Replace every field of an existing user, keeping its id."""
        user_id = parse_user_id(raw_id)
        self._require(user_id)
        payload = parse_user_payload(body)
        record = _build_record(user_id, payload)
        self.store.put(user_id, record)
        return record

    def delete_user(self, raw_id: str) -> None:
        """Remove an existing user."""
        user_id = parse_user_id(raw_id)
        if not self.store.delete(user_id):
            raise NotFound()

    def _require(self, user_id: UUID) -> UserRecord:
        record = self.store.get(user_id)
        if record is None:
            raise NotFound()
        return record


def _build_record(user_id: UUID, payload: UserPayload) -> UserRecord:
    return UserRecord(
        id=user_id,
        username=payload.username,
        age=payload.age,
        hobbies=tuple(payload.hobbies),
    )
