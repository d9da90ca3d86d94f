"""Error taxonomy shared by the store, the repository and the HTTP layer."""

from __future__ import annotations


class NotesError(Exception):
    """Base exception for every failure surfaced to HTTP callers."""


class StoreError(NotesError):
    """Raised when the store file cannot be opened, locked or prepared."""


class AccessError(NotesError):
    """Raised when an expected bucket is missing."""


class DecodeError(NotesError):
    """Raised when a client body or a stored value is not a valid note."""


class EncodeError(NotesError):
    """Raised when a note cannot be serialized."""


class NotFoundError(NotesError):
    """Raised when no note is stored under the requested id."""


class WriteError(NotesError):
    """Raised when a mutation fails inside a write transaction."""
