#!/usr/bin/env python3
"""
Print every note stored in the store file, in id order.

Usage:
  python scripts/list_notes.py [--db notes.db]
"""
from __future__ import annotations

import argparse
import sys

from notes_api.core.config import get_settings
from notes_api.db.store import Store
from notes_api.repositories.note_repository import NoteRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="List notes in the store file")
    ap.add_argument("--db", help="Store file (default: NOTES_DB_PATH or notes.db)")
    args = ap.parse_args()

    path = (args.db or "").strip() or get_settings().db_path
    with Store.open(path) as store:
        notes = NoteRepository(store).list_notes()
    for note in notes:
        print(f"{note.id}  {note.title}")
    print(f"{len(notes)} note(s)")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
