"""Record store abstractions."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from user_cluster.domain.models import UserRecord


class RecordStore(Protocol):
    """Keyed storage for user records owned by a single worker."""

    def list(self) -> list[UserRecord]:
        """Return every stored record in insertion order."""

    def get(self, user_id: UUID) -> UserRecord | None:
        """Return the record for an id, if present."""

    def put(self, user_id: UUID, record: UserRecord) -> None:
        """Insert or overwrite the record for an id."""

    def delete(self, user_id: UUID) -> bool:
        """Remove the record for an id and report whether it existed."""


@dataclass
class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store; contents live and die with the process."""

    _records: dict[UUID, UserRecord] = field(default_factory=dict)

    def list(self) -> list[UserRecord]:
        """Return every stored record."""
        return list(self._records.values())

    def get(self, user_id: UUID) -> UserRecord | None:
        """Return the record for an id, if present."""
        return self._records.get(user_id)

    def put(self, user_id: UUID, record: UserRecord) -> None:
        """Insert or overwrite a record."""
        self._records[user_id] = record

    def delete(self, user_id: UUID) -> bool:
        """Remove a record if present."""
        return self._records.pop(user_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)
