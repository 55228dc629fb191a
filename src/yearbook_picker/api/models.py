"""Pydantic models for the selection API."""

from datetime import date, datetime

from pydantic import BaseModel

from yearbook_picker.domain.deadlines import Deadline
from yearbook_picker.domain.models import Photo, StudentRecord
from yearbook_picker.domain.selection import SelectionSession


class CodeSubmission(BaseModel):
    """Access code typed by the student."""

    code: str


class PhotoSelection(BaseModel):
    """Photo picked from the gallery."""

    url: str


class StudentView(BaseModel):
    """Student details shown after a successful lookup."""

    first_name: str
    last_name: str
    has_chosen: bool
    chosen_photo_url: str | None = None
    chosen_photo_name: str | None = None


class PhotoView(BaseModel):
    """Gallery entry."""

    url: str
    original_name: str
    captured_at: datetime


class DeadlineView(BaseModel):
    """Submission deadline with its status for today."""

    label: str
    due: date
    passed: bool


class SessionView(BaseModel):
    """Observable state of a selection session."""

    session_id: str
    state: str
    entered_code: str
    student: StudentView | None = None
    photos: list[PhotoView]
    selected_url: str | None = None
    is_busy: bool
    error: str | None = None
    notice: str | None = None
    can_submit_code: bool
    can_confirm: bool
    deadlines: list[DeadlineView]


def build_session_view(
    session_id: str,
    session: SelectionSession,
    deadlines: list[Deadline],
    today: date,
) -> SessionView:
    """Render a session for the page."""
    return SessionView(
        session_id=session_id,
        state=session.state.value,
        entered_code=session.entered_code,
        student=_student_view(session.record) if session.record else None,
        photos=[_photo_view(photo) for photo in session.photo_list],
        selected_url=session.current_selection_url,
        is_busy=session.is_busy,
        error=session.last_error,
        notice=session.last_notice,
        can_submit_code=not session.is_busy,
        can_confirm=(
            not session.is_busy
            and session.record is not None
            and session.current_selection_url is not None
        ),
        deadlines=[
            DeadlineView(
                label=deadline.label,
                due=deadline.due,
                passed=deadline.has_passed(today),
            )
            for deadline in deadlines
        ],
    )


def _student_view(record: StudentRecord) -> StudentView:
    return StudentView(
        first_name=record.first_name,
        last_name=record.last_name,
        has_chosen=record.has_chosen,
        chosen_photo_url=record.chosen_photo_url,
        chosen_photo_name=record.chosen_photo_name,
    )


def _photo_view(photo: Photo) -> PhotoView:
    return PhotoView(
        url=photo.url,
        original_name=photo.original_name,
        captured_at=photo.captured_at,
    )
