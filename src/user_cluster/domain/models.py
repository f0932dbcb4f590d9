"""Domain models for the user service."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user held in a worker's record store."""

    id: UUID
    username: str
    age: int | float
    hobbies: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        """Return the JSON-ready representation of the record."""
        return {
            "id": str(self.id),
            "username": self.username,
            "age": self.age,
            "hobbies": list(self.hobbies),
        }
