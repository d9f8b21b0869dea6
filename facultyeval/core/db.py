# facultyeval/core/db.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine

from facultyeval.core.app_logger import get_logger
from facultyeval.core.errors import StoreFailure
from facultyeval.core.settings import settings

# Import all models so they register on the metadata
from facultyeval import models  # noqa: F401

log = get_logger("db")

# Shared engine for the whole app (singleton)
_engine = None


def _enable_sqlite_fk(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_url: str, **kwargs) -> Engine:
    connect_args = kwargs.pop("connect_args", {})
    if db_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)

    engine = create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,  # avoids broken connections
        connect_args=connect_args,
        **kwargs,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fk)
    return engine


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = build_engine(settings.DATABASE_URL)
    return _engine


def init_db(engine: Engine | None = None) -> None:
    """
    Create every table that does not exist yet.
    Runs on startup (on_startup).
    """
    SQLModel.metadata.create_all(engine or get_engine())


def get_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency, injected through Depends(get_session)
    """
    with Session(get_engine()) as session:
        yield session


@contextmanager
def store_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise store errors as StoreFailure."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        log.exception("store failure during %s", action)
        detail = str(getattr(e, "orig", None) or e).splitlines()[0]
        raise StoreFailure(f"{action} failed: {detail}") from e
