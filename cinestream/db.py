"""Database session management and the SQL-backed key-value storage."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker

from cinestream.core.config import get_settings
from cinestream.models import Base, StoredValue


def _database_url() -> str:
    """Return the SQLAlchemy URL from settings (defaults to local SQLite)."""
    return get_settings().database_url


engine = create_engine(_database_url(), future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(bind: Engine | None = None) -> None:
    """Create tables if they do not exist (handy for local dev)."""
    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Commit on success, roll back on failure, always close."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class KeyValueRepository:
    """High level data access helpers for stored values."""

    def get(self, session: Session, key: str) -> StoredValue | None:
        query = select(StoredValue).where(StoredValue.key == key)
        return session.execute(query).scalar_one_or_none()

    def upsert(self, session: Session, *, key: str, value: str) -> StoredValue:
        record = self.get(session, key)
        if record is None:
            record = StoredValue(key=key, value=value)
            session.add(record)
        else:
            record.value = value
        session.flush()
        return record

    def delete(self, session: Session, key: str) -> None:
        session.execute(delete(StoredValue).where(StoredValue.key == key))


class SqlKeyValueStorage:
    """KeyValueStorage implementation persisted through SQLAlchemy."""

    def __init__(
        self,
        *,
        session_factory: sessionmaker = SessionLocal,
        repository: KeyValueRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repo = repository or KeyValueRepository()

    def get(self, key: str) -> str | None:
        with session_scope(self._session_factory) as session:
            record = self._repo.get(session, key)
            return record.value if record else None

    def set(self, key: str, value: str) -> None:
        with session_scope(self._session_factory) as session:
            self._repo.upsert(session, key=key, value=value)

    def remove(self, key: str) -> None:
        with session_scope(self._session_factory) as session:
            self._repo.delete(session, key)
