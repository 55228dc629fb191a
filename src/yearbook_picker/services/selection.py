"""Selection workflow: redeem an access code, pick a photo, confirm it."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Protocol

from yearbook_picker.domain.errors import (
    NotFoundError,
    RecordStoreError,
    SelectionError,
    TransientError,
    ValidationError,
)
from yearbook_picker.domain.models import Photo, StudentRecord
from yearbook_picker.domain.selection import SelectionSession, SelectionState

logger = logging.getLogger(__name__)

CONFIRMED_NOTICE = "Photo confirmed!"
UPDATE_FAILED_MESSAGE = "Error updating selection."


class RecordStore(Protocol):
    """Persistence interface for student records and their photos."""

    def find_by_access_code(self, code: str) -> list[StudentRecord]:
        """Return every student whose access code equals the code."""

    def list_photos(self, record_id: str) -> list[Photo]:
        """Return all photos stored under a student."""

    def update_fields(self, record_id: str, fields: dict[str, object]) -> None:
        """Apply a partial update to one student."""

    def server_timestamp(self) -> object:
        """Return a value the store replaces with its own clock on write."""


@dataclass
class SelectionController:
    """Drives one selection session against the record store."""

    store: RecordStore
    session: SelectionSession = field(default_factory=SelectionSession)

    async def submit_code(self, raw_code: str) -> None:
        """Look up the student for an access code and load their photos."""
        session = self.session
        if session.is_busy:
            logger.debug("Ignoring code submission while a request is in flight")
            return

        code = raw_code.strip()
        if not code:
            session.last_error = ValidationError().message
            return

        session.entered_code = code
        session.record = None
        session.resolved_record_id = None
        session.photo_list = []
        session.current_selection_url = None
        session.last_error = None
        session.last_notice = None

        session.state = SelectionState.RESOLVING
        session.is_busy = True
        try:
            record, photos = await self._resolve(code)
        except SelectionError as exc:
            session.last_error = exc.message
            session.state = SelectionState.IDLE
            return
        finally:
            session.is_busy = False

        session.record = record
        session.resolved_record_id = record.record_id
        session.photo_list = photos
        session.current_selection_url = _default_selection(record, photos)
        session.state = SelectionState.READY
        logger.info(
            "Resolved student %s with %d photos", record.record_id, len(photos)
        )

    def select_photo(self, url: str) -> None:
        """Change the current selection; no remote call is made."""
        if self.session.state not in {
            SelectionState.READY,
            SelectionState.CONFIRMING,
        }:
            return
        self.session.current_selection_url = url

    async def confirm_selection(self) -> None:
        """Persist the current selection onto the resolved student."""
        session = self.session
        record = session.record
        record_id = session.resolved_record_id
        url = session.current_selection_url
        if (
            session.is_busy
            or session.state is not SelectionState.READY
            or record is None
            or record_id is None
            or url is None
        ):
            return

        session.state = SelectionState.CONFIRMING
        session.is_busy = True
        session.last_error = None
        session.last_notice = None

        photo = session.find_photo(url)
        name = photo.original_name if photo else None
        fields = {
            "chosen_photo_url": url,
            "chosen_photo_name": name,
            "has_chosen": True,
            "choice_timestamp": self.store.server_timestamp(),
        }
        try:
            await asyncio.to_thread(self.store.update_fields, record_id, fields)
        except RecordStoreError:
            logger.exception("Failed to confirm photo for student %s", record_id)
            session.last_error = UPDATE_FAILED_MESSAGE
        else:
            session.record = replace(
                record,
                chosen_photo_url=url,
                chosen_photo_name=name,
                has_chosen=True,
            )
            session.last_notice = CONFIRMED_NOTICE
            logger.info("Confirmed photo for student %s", record_id)
        finally:
            session.is_busy = False
            session.state = SelectionState.READY

    async def _resolve(self, code: str) -> tuple[StudentRecord, list[Photo]]:
        try:
            matches = await asyncio.to_thread(self.store.find_by_access_code, code)
        except RecordStoreError as exc:
            logger.exception("Failed to look up access code")
            raise TransientError() from exc
        if not matches:
            raise NotFoundError()
        if len(matches) > 1:
            logger.warning(
                "Access code matched %d students; using the first", len(matches)
            )
        record = matches[0]

        try:
            photos = await asyncio.to_thread(self.store.list_photos, record.record_id)
        except RecordStoreError as exc:
            logger.exception("Failed to load photos for student %s", record.record_id)
            raise TransientError() from exc
        return record, sorted(photos, key=lambda photo: photo.captured_at)


def _default_selection(record: StudentRecord, photos: list[Photo]) -> str | None:
    """Pick the previously confirmed photo, else the earliest one."""
    if record.has_chosen and record.chosen_photo_url:
        return record.chosen_photo_url
    if photos:
        return photos[0].url
    return None
