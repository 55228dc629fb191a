"""Domain models for the yearbook picker."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StudentRecord:
    """Represents a student eligible to pick a photo."""

    record_id: str
    first_name: str
    last_name: str
    access_code: str
    chosen_photo_url: str | None = None
    chosen_photo_name: str | None = None
    has_chosen: bool = False


@dataclass(frozen=True)
class Photo:
    """A candidate photo belonging to a student."""

    url: str
    original_name: str
    captured_at: datetime
