"""Note persistence on top of the DB/NOTES bucket."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from notes_api.core.errors import DecodeError, NotFoundError, StoreError, WriteError
from notes_api.db.store import NOTES_PATH, Store
from notes_api.domain.notes import NewNote, Note, decode_note, encode_note, new_note_id

logger = logging.getLogger(__name__)


class NoteRepository:
    """CRUD helpers wrapping one store transaction per call."""

    def __init__(self, store: Store, *, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.store = store
        self._clock = clock

    def list_notes(self) -> list[Note]:
        notes: list[Note] = []
        with self.store.read(*NOTES_PATH) as bucket:
            for _key, value in bucket.items():
                notes.append(self._decode(value))
        return notes

    def get_note(self, note_id: str) -> Note:
        with self.store.read(*NOTES_PATH) as bucket:
            value = bucket.get(note_id)
            if value is None:
                raise NotFoundError("can't find note")
            return self._decode(value)

    def create_note(self, new_note: NewNote) -> Note:
        note = Note.from_new(new_note_id(self._clock), new_note)
        payload = encode_note(note)
        try:
            with self.store.write(*NOTES_PATH) as bucket:
                bucket.put(note.id, payload)
        except (StoreError, WriteError) as exc:
            logger.warning("put %s failed: %s", note.id, exc)
            raise WriteError("can't create note") from exc
        logger.info("created note %s", note.id)
        return note

    def delete_note(self, note_id: str) -> str:
        try:
            with self.store.write(*NOTES_PATH) as bucket:
                bucket.delete(note_id)
        except (StoreError, WriteError) as exc:
            logger.warning("delete %s failed: %s", note_id, exc)
            raise WriteError("can't delete note") from exc
        logger.info("deleted note %s", note_id)
        return f"deleted note {note_id}"

    @staticmethod
    def _decode(value: bytes) -> Note:
        try:
            return decode_note(value)
        except DecodeError as exc:
            raise DecodeError("can't unmarshall note") from exc
