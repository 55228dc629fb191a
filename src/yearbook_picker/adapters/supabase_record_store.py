"""Supabase-backed record store."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from yearbook_picker.domain.errors import RecordStoreError
from yearbook_picker.domain.models import Photo, StudentRecord
from yearbook_picker.services.selection import RecordStore

STUDENTS_TABLE = "students"
PHOTOS_TABLE = "photos"

# PostgreSQL resolves the special "now" input against the server clock.
SERVER_TIMESTAMP = "now"

_STUDENT_COLUMNS = (
    "id, first_name, last_name, access_code, "
    "chosen_photo_url, chosen_photo_name, has_chosen"
)
_PHOTO_COLUMNS = "url, original_name, captured_at"
_WRITABLE_FIELDS = {
    "chosen_photo_url",
    "chosen_photo_name",
    "has_chosen",
    "choice_timestamp",
}
_STORE_ERRORS = (APIError, httpx.HTTPError, KeyError, ValueError)


@dataclass
class SupabaseRecordStore(RecordStore):
    """Supabase implementation for student and photo lookups."""

    client: Client

    def find_by_access_code(self, code: str) -> list[StudentRecord]:
        """Return students whose access code equals the code."""
        try:
            response = (
                self.client.table(STUDENTS_TABLE)
                .select(_STUDENT_COLUMNS)
                .eq("access_code", code)
                .execute()
            )
            return [_student_from_row(row) for row in response.data or []]
        except _STORE_ERRORS as exc:
            raise RecordStoreError("Failed to query students") from exc

    def list_photos(self, record_id: str) -> list[Photo]:
        """Return every photo row belonging to a student."""
        try:
            response = (
                self.client.table(PHOTOS_TABLE)
                .select(_PHOTO_COLUMNS)
                .eq("student_id", record_id)
                .execute()
            )
            return [_photo_from_row(row) for row in response.data or []]
        except _STORE_ERRORS as exc:
            raise RecordStoreError(
                f"Failed to list photos for student {record_id}"
            ) from exc

    def update_fields(self, record_id: str, fields: dict[str, object]) -> None:
        """Update the chosen-photo columns of one student."""
        unknown = set(fields) - _WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Refusing to update columns: {sorted(unknown)}")
        try:
            response = (
                self.client.table(STUDENTS_TABLE)
                .update(fields)
                .eq("id", record_id)
                .execute()
            )
        except _STORE_ERRORS as exc:
            raise RecordStoreError(f"Failed to update student {record_id}") from exc
        if not response.data:
            raise RecordStoreError(f"Student {record_id} was not updated")

    def server_timestamp(self) -> object:
        """Return the literal PostgreSQL stamps with its own clock."""
        return SERVER_TIMESTAMP


def _student_from_row(row: dict[str, object]) -> StudentRecord:
    return StudentRecord(
        record_id=str(row["id"]),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        access_code=str(row["access_code"]),
        chosen_photo_url=row.get("chosen_photo_url"),
        chosen_photo_name=row.get("chosen_photo_name"),
        has_chosen=bool(row.get("has_chosen")),
    )


def _photo_from_row(row: dict[str, object]) -> Photo:
    captured_at = datetime.fromisoformat(str(row["captured_at"]))
    if captured_at.tzinfo is None:
        captured_at = captured_at.replace(tzinfo=UTC)
    return Photo(
        url=str(row["url"]),
        original_name=str(row.get("original_name") or ""),
        captured_at=captured_at,
    )
