"""
Embedded, single-file, ordered key-value store with nested buckets.

A bucket is a named namespace holding byte values under string keys; buckets
can hold other buckets. Everything lives in one SQLite file opened once per
process. Reads run in snapshot transactions that are always discarded; writes
are serialized by a process-wide lock and either commit as a whole or roll
back every mutation.

Typical use::

    store = Store.open("notes.db")
    store.ensure_schema("DB", "NOTES")
    with store.write("DB", "NOTES") as bucket:
        bucket.put("k", b"v")
    with store.read("DB", "NOTES") as bucket:
        bucket.get("k")
"""
from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notes_api.core.errors import AccessError, NotesError, StoreError, WriteError

from . import models
from .session import Base, make_engine

logger = logging.getLogger(__name__)

ROOT_BUCKET = "DB"
NOTES_BUCKET = "NOTES"
NOTES_PATH = (ROOT_BUCKET, NOTES_BUCKET)
FILE_MODE = 0o600


@contextmanager
def _wrap(error_cls: type[NotesError], message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise error_cls(f"{message}: {exc}") from exc


class Transaction:
    """A read or write transaction; the entry point to top-level buckets."""

    def __init__(self, session: Session, *, writable: bool) -> None:
        self.session = session
        self.writable = writable

    def bucket(self, name: str) -> Optional["BucketHandle"]:
        return self._child(None, name)

    def create_bucket_if_not_exists(self, name: str) -> "BucketHandle":
        return self._ensure_child(None, name)

    def resolve(self, path: tuple[str, ...]) -> "BucketHandle":
        """Walk ``path`` from the top level, raising AccessError on a gap."""
        if not path:
            raise AccessError("can't access bucket: empty path")
        handle: Optional[BucketHandle] = None
        for name in path:
            handle = self.bucket(name) if handle is None else handle.bucket(name)
            if handle is None:
                raise AccessError(f"can't access bucket {'/'.join(path)}")
        return handle

    def require_writable(self) -> None:
        if not self.writable:
            raise WriteError("tx not writable")

    # -------------------------- internals --------------------------
    def _find_bucket(self, parent_id: Optional[int], name: str) -> Optional[models.Bucket]:
        stmt = select(models.Bucket).where(models.Bucket.name == name)
        if parent_id is None:
            stmt = stmt.where(models.Bucket.parent_id.is_(None))
        else:
            stmt = stmt.where(models.Bucket.parent_id == parent_id)
        with _wrap(StoreError, "could not read bucket"):
            return self.session.execute(stmt).scalar_one_or_none()

    def _child(self, parent_id: Optional[int], name: str) -> Optional["BucketHandle"]:
        row = self._find_bucket(parent_id, name)
        return BucketHandle(self, row.id, name) if row is not None else None

    def _ensure_child(self, parent_id: Optional[int], name: str) -> "BucketHandle":
        self.require_writable()
        if not name:
            raise WriteError("bucket name required")
        row = self._find_bucket(parent_id, name)
        if row is None:
            if parent_id is not None and self.session.get(models.Entry, (parent_id, name)) is not None:
                raise WriteError("incompatible value")
            row = models.Bucket(parent_id=parent_id, name=name)
            with _wrap(WriteError, "could not create bucket"):
                self.session.add(row)
                self.session.flush()
            logger.info("created bucket %s", name)
        return BucketHandle(self, row.id, name)


class BucketHandle:
    """Key-value view of one bucket, valid only inside its transaction."""

    def __init__(self, tx: Transaction, bucket_id: int, name: str) -> None:
        self._tx = tx
        self.id = bucket_id
        self.name = name

    @property
    def writable(self) -> bool:
        return self._tx.writable

    def get(self, key: str) -> Optional[bytes]:
        with _wrap(StoreError, "could not read key"):
            entry = self._tx.session.get(models.Entry, (self.id, key))
        return bytes(entry.value) if entry is not None else None

    def put(self, key: str, value: bytes) -> None:
        self._tx.require_writable()
        if not key:
            raise WriteError("key required")
        if self._tx._find_bucket(self.id, key) is not None:
            raise WriteError("incompatible value")
        session = self._tx.session
        with _wrap(WriteError, "could not put key"):
            entry = session.get(models.Entry, (self.id, key))
            if entry is None:
                session.add(models.Entry(bucket_id=self.id, key=key, value=bytes(value)))
            else:
                entry.value = bytes(value)
            session.flush()

    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        self._tx.require_writable()
        session = self._tx.session
        with _wrap(WriteError, "could not delete key"):
            entry = session.get(models.Entry, (self.id, key))
            if entry is not None:
                session.delete(entry)
                session.flush()

    def items(self) -> Iterator[tuple[str, bytes]]:
        """Yield ``(key, value)`` pairs in byte order of the key."""
        stmt = (
            select(models.Entry.key, models.Entry.value)
            .where(models.Entry.bucket_id == self.id)
            .order_by(models.Entry.key)
        )
        with _wrap(StoreError, "could not iterate bucket"):
            rows = self._tx.session.execute(stmt).all()
        for key, value in rows:
            yield key, bytes(value)

    def keys(self) -> list[str]:
        return [key for key, _ in self.items()]

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def bucket(self, name: str) -> Optional["BucketHandle"]:
        return self._tx._child(self.id, name)

    def create_bucket_if_not_exists(self, name: str) -> "BucketHandle":
        return self._tx._ensure_child(self.id, name)


class Store:
    """Long-lived handle on the store file, shared by every request."""

    def __init__(self, path: Union[str, Path], engine: Engine) -> None:
        self.path = str(path)
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=True, expire_on_commit=False, future=True)
        self._write_lock = threading.Lock()
        self._closed = False

    @classmethod
    def open(cls, path: Union[str, Path]) -> "Store":
        """Open (creating if absent) the store file at ``path``."""
        file_path = Path(path)
        try:
            file_path.touch(mode=FILE_MODE, exist_ok=True)
            engine = make_engine(str(file_path))
        except (OSError, SQLAlchemyError) as exc:
            raise StoreError(f"could not open db: {exc}") from exc
        try:
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, sqlite3.Error) as exc:
            engine.dispose()
            raise StoreError(f"could not open db: {exc}") from exc
        logger.info("opened store %s", file_path)
        return cls(file_path, engine)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._engine.dispose()
        logger.info("closed store %s", self.path)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def ensure_schema(self, *path: str) -> None:
        """Create every bucket along ``path`` (default DB/NOTES) if absent."""
        path = path or NOTES_PATH
        try:
            with self.update() as tx:
                handle: Optional[BucketHandle] = None
                for name in path:
                    if handle is None:
                        handle = tx.create_bucket_if_not_exists(name)
                    else:
                        handle = handle.create_bucket_if_not_exists(name)
        except NotesError as exc:
            raise StoreError(f"could not set up database: {exc}") from exc

    # -------------------------- transactions --------------------------
    @contextmanager
    def view(self) -> Iterator[Transaction]:
        """Read transaction over a consistent snapshot; always discarded."""
        self._check_open()
        session = self._sessions()
        try:
            session.begin()
            yield Transaction(session, writable=False)
        finally:
            session.rollback()
            session.close()

    @contextmanager
    def update(self) -> Iterator[Transaction]:
        """Write transaction; commits on success, rolls back on any error."""
        self._check_open()
        with self._write_lock:
            session = self._sessions()
            try:
                session.begin()
                yield Transaction(session, writable=True)
                with _wrap(WriteError, "could not commit"):
                    session.commit()
            except BaseException:
                logger.debug("rolling back write transaction on %s", self.path)
                session.rollback()
                raise
            finally:
                session.close()

    @contextmanager
    def read(self, *path: str) -> Iterator[BucketHandle]:
        """Read transaction scoped to the nested bucket at ``path``."""
        with self.view() as tx:
            yield tx.resolve(path)

    @contextmanager
    def write(self, *path: str) -> Iterator[BucketHandle]:
        """Write transaction scoped to the nested bucket at ``path``."""
        with self.update() as tx:
            yield tx.resolve(path)

    def _check_open(self) -> None:
        if self._closed:
            raise StoreError("database not open")
