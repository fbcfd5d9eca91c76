"""SQLAlchemy engine and session setup for the holdings ledger."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from coinwatch.config import get_settings

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine for the configured ledger URL.

    SQLite connections are shared between the API worker threads and the
    monitor pool, so the same-thread check is turned off for that backend
    only.
    """
    connect_args = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, echo=False)


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Session that commits on success and rolls back on any error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create the holdings table if it does not exist."""
    from .models import Base

    Base.metadata.create_all(bind=engine)
