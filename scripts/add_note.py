#!/usr/bin/env python3
"""
Create a note directly in the store file, bypassing the HTTP service.

Usage:
  python scripts/add_note.py --title "Groceries" --body "milk, eggs" [--db notes.db]
"""
from __future__ import annotations

import argparse
import sys

from notes_api.core.config import get_settings
from notes_api.db.store import NOTES_PATH, Store
from notes_api.domain.notes import NewNote
from notes_api.repositories.note_repository import NoteRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a note in the store file")
    ap.add_argument("--title", default="", help="Note title")
    ap.add_argument("--body", default="", help="Note body")
    ap.add_argument("--db", help="Store file (default: NOTES_DB_PATH or notes.db)")
    args = ap.parse_args()

    path = (args.db or "").strip() or get_settings().db_path
    with Store.open(path) as store:
        store.ensure_schema(*NOTES_PATH)
        note = NoteRepository(store).create_note(NewNote(title=args.title, body=args.body))
    print("OK: note created")
    print(f"  ID: {note.id}")
    print(f"  Title: {note.title}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
