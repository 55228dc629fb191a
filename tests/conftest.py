"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import pytest

from yearbook_picker.config import Settings
from yearbook_picker.containers import AppContainer
from yearbook_picker.domain.errors import RecordStoreError
from yearbook_picker.domain.models import Photo, StudentRecord
from yearbook_picker.services.registry import SessionRegistry
from yearbook_picker.services.selection import RecordStore

SERVER_NOW = "server-now"


def photo(url: str, seconds: int, name: str | None = None) -> Photo:
    return Photo(
        url=url,
        original_name=name or f"{url}.jpg",
        captured_at=datetime.fromtimestamp(seconds, tz=UTC),
    )


@dataclass
class InMemoryRecordStore(RecordStore):
    """In-memory record store for tests."""

    students: dict[str, StudentRecord] = field(default_factory=dict)
    photos: dict[str, list[Photo]] = field(default_factory=dict)
    calls: list[tuple[str, object]] = field(default_factory=list)
    updates: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    fail_lookup: bool = False
    fail_photos: bool = False
    fail_update: bool = False

    def add_student(
        self, record: StudentRecord, photos: list[Photo] | None = None
    ) -> StudentRecord:
        self.students[record.record_id] = record
        self.photos[record.record_id] = list(photos or [])
        return record

    def find_by_access_code(self, code: str) -> list[StudentRecord]:
        self.calls.append(("find_by_access_code", code))
        if self.fail_lookup:
            raise RecordStoreError("lookup unavailable")
        return [
            record for record in self.students.values() if record.access_code == code
        ]

    def list_photos(self, record_id: str) -> list[Photo]:
        self.calls.append(("list_photos", record_id))
        if self.fail_photos:
            raise RecordStoreError("photos unavailable")
        return list(self.photos.get(record_id, []))

    def update_fields(self, record_id: str, fields: dict[str, object]) -> None:
        self.calls.append(("update_fields", record_id))
        if self.fail_update:
            raise RecordStoreError("update rejected")
        self.updates.append((record_id, dict(fields)))
        self.students[record_id] = replace(
            self.students[record_id],
            chosen_photo_url=fields["chosen_photo_url"],
            chosen_photo_name=fields["chosen_photo_name"],
            has_chosen=bool(fields["has_chosen"]),
        )

    def server_timestamp(self) -> object:
        return SERVER_NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        submission_deadlines="ES=2025-10-24,MS=2025-10-10",
    )


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.add_student(
        StudentRecord(
            record_id="r1",
            first_name="Ana",
            last_name="Reyes",
            access_code="ABC123",
        ),
        [photo("p2", 200), photo("p1", 100)],
    )
    return store


@pytest.fixture
def container(
    settings: Settings, record_store: InMemoryRecordStore
) -> AppContainer:
    session_registry = SessionRegistry(
        record_store, ttl_seconds=settings.session_ttl_seconds
    )

    async def close_resources() -> None:
        session_registry.clear()

    return AppContainer(
        settings=settings,
        record_store=record_store,
        session_registry=session_registry,
        deadlines=[],
        close_resources=close_resources,
    )
