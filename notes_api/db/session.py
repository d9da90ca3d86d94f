"""Engine helpers for the single-file SQLite backend."""
from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def make_engine(path: str) -> Engine:
    """Build an engine over the SQLite file at ``path``.

    pysqlite normally defers BEGIN until the first write, which would let a
    read transaction span several snapshots. The listeners below hand
    transaction control back to SQLAlchemy so every transaction starts with an
    explicit BEGIN, and switch the file to WAL so readers never wait on the
    writer.
    """
    engine = create_engine(
        f"sqlite:///{path}",
        future=True,
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine
