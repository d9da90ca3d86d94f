from __future__ import annotations

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from notes_api.domain.notes import decode_new_note
from notes_api.repositories.note_repository import NoteRepository

router = APIRouter(tags=["notes"])


def _get_note_repository(request: Request) -> NoteRepository:
    repo = getattr(getattr(request.app, "state", None), "note_repository", None)
    if not repo:
        raise RuntimeError("NoteRepository not configured")
    return repo


@router.get("/notes")
def list_notes(request: Request):
    repo = _get_note_repository(request)
    return [note.to_dict() for note in repo.list_notes()]


@router.post("/note")
async def create_note(request: Request):
    repo = _get_note_repository(request)
    new_note = decode_new_note(await request.body())
    note = await run_in_threadpool(repo.create_note, new_note)
    return note.to_dict()


@router.get("/note/{note_id}")
def get_note(note_id: str, request: Request):
    repo = _get_note_repository(request)
    return repo.get_note(note_id).to_dict()


@router.delete("/note/{note_id}")
def delete_note(note_id: str, request: Request):
    repo = _get_note_repository(request)
    return repo.delete_note(note_id)
