"""Note records, id generation and their JSON encoding."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from notes_api.core.errors import DecodeError, EncodeError

ID_FORMAT = "%Y%m%d%H%M%S"


class _Pairs(list):
    """Key/value pairs of one decoded JSON object, in document order."""


@dataclass(frozen=True)
class NewNote:
    """Creation input; the server assigns the id."""

    title: str = ""
    body: str = ""


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    body: str

    @classmethod
    def from_new(cls, note_id: str, new_note: NewNote) -> "Note":
        return cls(id=note_id, title=new_note.title, body=new_note.body)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title, "body": self.body}


def new_note_id(clock: Optional[Callable[[], datetime]] = None) -> str:
    """Format the current wall-clock time at one-second resolution.

    Two calls within the same second return the same id.
    """
    now = (clock or datetime.now)()
    return now.strftime(ID_FORMAT)


def _fields(raw: Union[str, bytes], names: tuple[str, ...]) -> dict[str, str]:
    """Parse a JSON object and pick ``names`` case-insensitively.

    The last non-null occurrence of a field wins, whatever its spelling; a null
    leaves the field as it was. Any occurrence of a non-string value is an
    error. Absent fields come back as empty strings; unknown fields are ignored.
    """
    try:
        pairs = json.loads(raw, object_pairs_hook=_Pairs)
    except (TypeError, ValueError) as exc:
        raise DecodeError(str(exc)) from exc
    if pairs is None:
        return {name: "" for name in names}
    if not isinstance(pairs, _Pairs):
        raise DecodeError(f"cannot unmarshal {type(pairs).__name__} into note")
    out = {name: "" for name in names}
    for key, value in pairs:
        folded = key.lower()
        if folded not in out or value is None:
            continue
        if not isinstance(value, str):
            raise DecodeError(f"cannot unmarshal {type(value).__name__} into field {folded}")
        out[folded] = value
    return out


def decode_new_note(raw: Union[str, bytes]) -> NewNote:
    return NewNote(**_fields(raw, ("title", "body")))


def decode_note(raw: Union[str, bytes]) -> Note:
    return Note(**_fields(raw, ("id", "title", "body")))


def encode_note(note: Note) -> bytes:
    try:
        return json.dumps(note.to_dict(), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError(str(exc)) from exc

