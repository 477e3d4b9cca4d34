"""Engine construction, schema creation, sessions, and the Backend context object"""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from sitecms.crud import models  # noqa: F401  registers tables on SQLModel.metadata
from sitecms.crud.events import ChangeAction, ChangeEvent, ChangeFeed


logger = logging.getLogger(__name__)

DEFAULT_URL = "sqlite:///sitecms.db"
MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def get_url(explicit: str | None = None) -> str:
    """Return explicit URL, else SITECMS_DB_URL, else the SQLite default."""
    if explicit:
        return explicit
    return os.getenv("SITECMS_DB_URL") or DEFAULT_URL


def make_engine(db_url: str) -> Engine:
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if db_url in MEMORY_URLS:
        kwargs["poolclass"] = StaticPool  # one shared connection, else each checkout sees an empty db
    return create_engine(db_url, echo=False, **kwargs)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def get_session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


class Backend:
    """Explicit database client: owns the engine and the change feed for one process session.

    open() creates the engine and schema, close() disposes the engine and ends
    every change stream. Writes made through session() publish their recorded
    change events only after a successful commit.
    """

    def __init__(self, db_url: str | None = None, engine: Optional[Engine] = None):
        self.db_url = get_url(db_url)
        self.engine = engine
        self.feed = ChangeFeed()
        self._pending: list[ChangeEvent] = []

    def open(self) -> "Backend":
        if self.engine is None:
            self.engine = make_engine(self.db_url)
        init_db(self.engine)
        self.feed.reopen()
        return self

    def close(self) -> None:
        self.feed.close()
        if self.engine is not None:
            self.engine.dispose()

    def __enter__(self) -> "Backend":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    def record(self, table: str, action: ChangeAction, row_id: UUID | None = None) -> None:
        """Queue a change event to publish when the current session commits."""
        self._pending.append(ChangeEvent(table, action, row_id))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Transactional session: commit on success, roll back and drop pending events on error."""
        if self.engine is None:
            raise RuntimeError("Backend is not open")
        with Session(self.engine, expire_on_commit=False) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                self._pending.clear()
                raise
        events, self._pending = self._pending, []
        for event in events:
            self.feed.publish(event)
