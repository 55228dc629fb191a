"""Tests for the Supabase record store."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import httpx
import pytest
from postgrest.exceptions import APIError

from yearbook_picker.adapters.supabase_record_store import (
    SERVER_TIMESTAMP,
    SupabaseRecordStore,
)
from yearbook_picker.domain.errors import RecordStoreError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_find_by_access_code_maps_rows() -> None:
    client = FakeSupabaseClient()
    students = client.table("students")
    students.queue(
        "select",
        [
            {
                "id": "b7f1",
                "first_name": "Ana",
                "last_name": "Reyes",
                "access_code": "ABC123",
                "chosen_photo_url": None,
                "chosen_photo_name": None,
                "has_chosen": None,
            }
        ],
    )

    records = SupabaseRecordStore(client).find_by_access_code("ABC123")

    assert students.last_filters == [("access_code", "ABC123")]
    assert len(records) == 1
    assert records[0].record_id == "b7f1"
    assert records[0].first_name == "Ana"
    assert records[0].has_chosen is False


def test_find_by_access_code_without_match() -> None:
    client = FakeSupabaseClient()

    assert SupabaseRecordStore(client).find_by_access_code("NOPE") == []


def test_list_photos_parses_timestamps() -> None:
    client = FakeSupabaseClient()
    photos = client.table("photos")
    photos.queue(
        "select",
        [
            {
                "url": "https://cdn.example/p1.jpg",
                "original_name": "IMG_0001.jpg",
                "captured_at": "2025-09-01T08:30:00+00:00",
            },
            {
                "url": "https://cdn.example/p2.jpg",
                "original_name": "IMG_0002.jpg",
                "captured_at": "2025-09-01T08:31:00",
            },
        ],
    )

    result = SupabaseRecordStore(client).list_photos("b7f1")

    assert photos.last_filters == [("student_id", "b7f1")]
    assert result[0].original_name == "IMG_0001.jpg"
    assert result[0].captured_at == datetime(2025, 9, 1, 8, 30, tzinfo=UTC)
    assert result[1].captured_at.tzinfo is UTC


def test_update_fields_targets_student_id() -> None:
    client = FakeSupabaseClient()
    students = client.table("students")
    students.queue("update", [{"id": "b7f1"}])
    store = SupabaseRecordStore(client)
    fields = {
        "chosen_photo_url": "https://cdn.example/p2.jpg",
        "chosen_photo_name": "IMG_0002.jpg",
        "has_chosen": True,
        "choice_timestamp": store.server_timestamp(),
    }

    store.update_fields("b7f1", fields)

    assert students.last_payload == fields
    assert students.last_filters == [("id", "b7f1")]
    assert fields["choice_timestamp"] == SERVER_TIMESTAMP


def test_update_fields_without_matching_row_fails() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(client).update_fields("missing", {"has_chosen": True})


def test_update_fields_rejects_other_columns() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(ValueError):
        SupabaseRecordStore(client).update_fields("b7f1", {"access_code": "X"})


def test_api_errors_become_record_store_errors() -> None:
    client = FakeSupabaseClient()
    client.table("students").error = APIError({"message": "permission denied"})

    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(client).find_by_access_code("ABC123")


def test_transport_errors_become_record_store_errors() -> None:
    client = FakeSupabaseClient()
    client.table("photos").error = httpx.ConnectError("connection refused")

    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(client).list_photos("b7f1")


def test_malformed_rows_become_record_store_errors() -> None:
    client = FakeSupabaseClient()
    client.table("photos").queue("select", [{"url": "p1", "captured_at": "soon"}])

    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(client).list_photos("b7f1")
