"""Exception types raised by notesearch."""

from __future__ import annotations


class NoteSearchError(Exception):
    """Base class for notesearch errors."""


class UnknownSourceError(NoteSearchError):
    """Requested source key is not registered."""

    def __init__(self, key: str):
        super().__init__(f"Unknown source: {key}")
        self.key = key


class FetchError(NoteSearchError):
    """A fetch session aborted on a hard failure."""


class SourceHTTPError(FetchError):
    """A source answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionCancelled(NoteSearchError):
    """A fetch session was superseded by a newer one."""


class ExportError(NoteSearchError):
    """An exporter could not complete."""
