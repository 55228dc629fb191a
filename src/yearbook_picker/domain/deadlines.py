"""Submission deadline models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Deadline:
    """A per-department submission deadline."""

    label: str
    due: date

    def has_passed(self, today: date) -> bool:
        """Return True once the deadline day is over."""
        return today > self.due
