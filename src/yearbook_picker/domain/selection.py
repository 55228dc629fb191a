"""Domain models for a selection session."""

from dataclasses import dataclass, field
from enum import Enum

from yearbook_picker.domain.models import Photo, StudentRecord


class SelectionState(Enum):
    """Lifecycle states of a selection session."""

    IDLE = "idle"
    RESOLVING = "resolving"
    READY = "ready"
    CONFIRMING = "confirming"


@dataclass
class SelectionSession:
    """Transient state of one visit to the selection page."""

    entered_code: str = ""
    resolved_record_id: str | None = None
    record: StudentRecord | None = None
    photo_list: list[Photo] = field(default_factory=list)
    current_selection_url: str | None = None
    is_busy: bool = False
    last_error: str | None = None
    last_notice: str | None = None
    state: SelectionState = SelectionState.IDLE

    def find_photo(self, url: str) -> Photo | None:
        """Return the loaded photo with the given url, if any."""
        for photo in self.photo_list:
            if photo.url == url:
                return photo
        return None
