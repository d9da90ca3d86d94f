"""Create the DB -> NOTES bucket hierarchy in the configured store file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from notes_api.core.config import get_settings
from notes_api.core.errors import StoreError
from notes_api.core.logs import configure_logging

from .store import NOTES_PATH, Store

logger = logging.getLogger(__name__)


def bootstrap(path: Union[str, Path]) -> None:
    """Open the store once, ensure the schema exists, then close it.

    Safe to call on every start: existing buckets and entries are kept.
    """
    with Store.open(path) as store:
        store.ensure_schema(*NOTES_PATH)
    logger.info("store %s is ready", path)


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        bootstrap(settings.db_path)
        print("Database buckets created successfully.")
    except StoreError as exc:
        raise SystemExit(f"Failed to create buckets: {exc}") from exc
