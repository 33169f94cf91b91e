from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .base import Base


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_options(url: str) -> dict[str, Any]:
    if _is_sqlite(url) and ":memory:" in url:
        # Every session must share the one in-memory database.
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {}


def _enforce_guide_entry_cascade(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    engine = create_engine(url, echo=echo, **_engine_options(url))
    if _is_sqlite(url):
        event.listen(engine, "connect", _enforce_guide_entry_cascade)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def open_guide_store(url: str, echo: bool = False) -> sessionmaker[Session]:
    """Connect to ``url``, make sure the guide tables exist and return a session factory."""
    engine = build_engine(url, echo=echo)
    create_schema(engine)
    return build_session_factory(engine)
