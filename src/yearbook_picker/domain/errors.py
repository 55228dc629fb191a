"""Errors raised by the selection workflow."""


class SelectionError(Exception):
    """Base class for errors surfaced to the person making a selection."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(SelectionError):
    """Input rejected before any remote call."""

    message = "Please enter a code."


class NotFoundError(SelectionError):
    """The access code does not resolve to a student."""

    message = "Invalid code."


class TransientError(SelectionError):
    """The record store failed; retrying may succeed."""

    message = "Error fetching data."


class RecordStoreError(Exception):
    """Raised by record store adapters when a remote call fails."""
