"""Tests for the in-memory record store."""

from uuid import uuid4

from user_cluster.domain.models import UserRecord
from user_cluster.services.store import InMemoryRecordStore


def _record(username: str = "alice") -> UserRecord:
    return UserRecord(id=uuid4(), username=username, age=30, hobbies=("chess",))


def test_empty_store_lists_nothing() -> None:
    assert InMemoryRecordStore().list() == []


def test_put_then_get_and_list() -> None:
    store = InMemoryRecordStore()
    first = _record("alice")
    second = _record("bob")

    store.put(first.id, first)
    store.put(second.id, second)

    assert store.get(first.id) == first
    assert store.list() == [first, second]
    assert len(store) == 2


def test_put_overwrites_existing_id() -> None:
    store = InMemoryRecordStore()
    original = _record("alice")
    replacement = UserRecord(
        id=original.id, username="alicia", age=31, hobbies=()
    )

    store.put(original.id, original)
    store.put(original.id, replacement)

    assert store.get(original.id) == replacement
    assert len(store) == 1


def test_delete_reports_whether_record_existed() -> None:
    store = InMemoryRecordStore()
    record = _record()
    store.put(record.id, record)

    assert store.delete(record.id) is True
    assert store.delete(record.id) is False
    assert store.get(record.id) is None


def test_stores_do_not_share_records() -> None:
    first = InMemoryRecordStore()
    second = InMemoryRecordStore()
    record = _record()

    first.put(record.id, record)

    assert second.get(record.id) is None
    assert second.list() == []
