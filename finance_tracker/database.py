"""SQLite engine and sessions behind the transactions collection."""

from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from finance_tracker.config import settings

IN_MEMORY_URL = "sqlite://"


def make_engine(url: Optional[str] = None) -> Engine:
    """Create an engine that collection calls can use from worker threads.

    An in-memory database lives in a single shared connection, otherwise each
    thread would see its own empty database.
    """
    url = url or settings.database_url
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url == IN_MEMORY_URL:
        options["poolclass"] = StaticPool
    return create_engine(url, echo=False, **options)


engine = make_engine()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the transactions table if it is missing."""
    from finance_tracker.models import Transaction  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session(bind: Optional[Engine] = None) -> Session:
    return Session(bind or engine)
