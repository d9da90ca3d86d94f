"""Notes HTTP service: app factory and entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from notes_api.core.config import Settings, get_settings
from notes_api.core.errors import NotesError
from notes_api.core.logs import configure_logging
from notes_api.db.store import NOTES_PATH, Store
from notes_api.repositories.note_repository import NoteRepository
from notes_api.routers import notes as notes_router

logger = logging.getLogger(__name__)


def _notes_error_handler(request: Request, exc: NotesError) -> PlainTextResponse:
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around one store handle shared by every request.

    The store is opened and its bucket hierarchy ensured here, so a store that
    cannot be opened aborts startup with StoreError.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = Store.open(settings.db_path)
    try:
        store.ensure_schema(*NOTES_PATH)
    except NotesError:
        store.close()
        raise

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.close()

    app = FastAPI(title="Notes API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.note_repository = NoteRepository(store)
    app.add_exception_handler(NotesError, _notes_error_handler)
    app.include_router(notes_router.router)
    return app


def main() -> None:
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
