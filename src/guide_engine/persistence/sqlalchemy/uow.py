from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from .repos import GuideRepo


class SQLAlchemyUnitOfWork:
    """One session per ``with`` block; uncommitted work is rolled back on exit."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory
        self.session: Session | None = None
        self.guides: GuideRepo | None = None

    def __enter__(self) -> "SQLAlchemyUnitOfWork":
        if self.session is not None:
            raise RuntimeError("unit of work is already open")
        self.session = self._session_factory()
        self.guides = GuideRepo(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session, self.session, self.guides = self.session, None, None
        if session is None:
            return
        try:
            if session.in_transaction():
                session.rollback()
        finally:
            session.close()

    def _active(self) -> Session:
        if self.session is None:
            raise RuntimeError("unit of work used outside its with block")
        return self.session

    def commit(self) -> None:
        self._active().commit()

    def rollback(self) -> None:
        self._active().rollback()
