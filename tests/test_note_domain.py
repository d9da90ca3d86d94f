from __future__ import annotations

import re
import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from notes_api.core.errors import DecodeError, EncodeError
from notes_api.domain.notes import (
    NewNote,
    Note,
    decode_new_note,
    decode_note,
    encode_note,
    new_note_id,
)


def test_new_note_id_is_fixed_width_timestamp():
    assert new_note_id(lambda: datetime(2024, 3, 5, 7, 8, 9)) == "20240305070809"
    assert re.fullmatch(r"\d{14}", new_note_id())


def test_encode_uses_lowercase_keys_and_round_trips():
    note = Note(id="20240101120000", title="Groceries", body="milk, eggs")
    raw = encode_note(note)
    assert raw == b'{"id": "20240101120000", "title": "Groceries", "body": "milk, eggs"}'
    assert decode_note(raw) == note

    unicode_note = Note(id="20240101120001", title="café ☕", body="")
    assert decode_note(encode_note(unicode_note)) == unicode_note


def test_decode_matches_fields_case_insensitively():
    assert decode_new_note('{"Title": "A", "BODY": "B"}') == NewNote(title="A", body="B")
    assert decode_note(b'{"Id": "1", "Title": "t", "Body": "b"}') == Note(id="1", title="t", body="b")


def test_decode_last_duplicate_wins():
    assert decode_new_note('{"title": "a", "Title": "A", "body": "B"}') == NewNote(title="A", body="B")


def test_decode_missing_and_null_fields_are_empty():
    assert decode_new_note("{}") == NewNote()
    assert decode_new_note('{"title": null, "extra": 1}') == NewNote()
    assert decode_new_note("null") == NewNote()


@pytest.mark.parametrize("raw", ["", "not json", "[]", '"text"', "42", '{"title": 5}', '{"body": {"x": 1}}'])
def test_decode_rejects_invalid_documents(raw):
    with pytest.raises(DecodeError):
        decode_new_note(raw)


def test_encode_rejects_unencodable_text():
    with pytest.raises(EncodeError):
        encode_note(Note(id="1", title="\ud800", body=""))


def test_decode_null_duplicate_keeps_earlier_value():
    assert decode_new_note('{"title":"a","title":null,"body":"b"}') == NewNote(title="a", body="b")
    assert decode_new_note('{"Title":"a","TITLE":null}') == NewNote(title="a", body="")


def test_decode_rejects_wrong_typed_duplicate_even_when_later_value_is_string():
    with pytest.raises(DecodeError):
        decode_new_note('{"title":5,"title":"a","body":"b"}')
    with pytest.raises(DecodeError):
        decode_note('{"id":"1","Body":[],"body":"b"}')
