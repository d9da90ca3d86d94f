from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from notes_api.app import create_app
from notes_api.core import config as core_config
from notes_api.core.config import Settings
from notes_api.core.errors import StoreError
from notes_api.db.bootstrap import bootstrap
from notes_api.db.store import NOTES_PATH, Store
from notes_api.domain.notes import NewNote
from notes_api.repositories.note_repository import NoteRepository


def test_bootstrap_twice_keeps_existing_notes(tmp_path):
    db_file = tmp_path / "notes.db"
    bootstrap(db_file)
    with Store.open(db_file) as store:
        note = NoteRepository(store).create_note(NewNote(title="a", body="b"))
    bootstrap(db_file)
    with Store.open(db_file) as store:
        assert NoteRepository(store).list_notes() == [note]
        with store.read(*NOTES_PATH):
            pass


def test_bootstrap_fails_on_unopenable_path(tmp_path):
    with pytest.raises(StoreError):
        bootstrap(tmp_path / "no-such-dir" / "notes.db")


def test_create_app_aborts_when_store_cannot_open(tmp_path):
    settings = Settings(
        app_env="test",
        db_path=str(tmp_path / "no-such-dir" / "notes.db"),
        host="127.0.0.1",
        port=8080,
        log_level="INFO",
    )
    with pytest.raises(StoreError):
        create_app(settings)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("NOTES_DB_PATH", "/tmp/other.db")
    monkeypatch.setenv("APP_PORT", "not-a-port")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.db_path == "/tmp/other.db"
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
    finally:
        core_config.get_settings.cache_clear()


def test_settings_defaults(monkeypatch):
    for name in ("NOTES_DB_PATH", "APP_PORT", "APP_HOST", "APP_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.db_path == "notes.db"
        assert settings.port == 8080
        assert settings.app_env == "dev"
    finally:
        core_config.get_settings.cache_clear()
