"""Database engine/session helpers for the standings store."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DEFAULT_DB_URL = "sqlite:///standings.db"


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def create_db_engine(db_url: str = DEFAULT_DB_URL) -> Engine:
    """Create an engine; SQLite connections enforce foreign keys (league cascades)."""
    engine = create_engine(db_url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(
    db_url: str = DEFAULT_DB_URL,
    *,
    ensure_schema: Callable[[Engine], None] | None = None,
) -> Iterator[Session]:
    """Open one session against ``db_url``, creating tables first when asked.

    The caller commits; the engine is disposed on exit.
    """
    engine = create_db_engine(db_url)
    try:
        if ensure_schema is not None:
            ensure_schema(engine)
        with create_session_factory(engine)() as session:
            yield session
    finally:
        engine.dispose()


__all__ = ["DEFAULT_DB_URL", "create_db_engine", "create_session_factory", "session_scope"]
