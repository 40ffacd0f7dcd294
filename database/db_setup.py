# database/db_setup.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import DATABASE_URL

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()


# ---------------------------------------------------------------------
# Engine / session factories
# ---------------------------------------------------------------------
def get_engine(url: Optional[str] = None) -> Engine:
    """
    Return a SQLAlchemy Engine for `url` (DATABASE_URL by default).

    SQLite connections may be shared with FastAPI's threadpool; an
    in-memory database is pinned to a single connection so every
    session sees the same tables.

    Example:
        engine = get_engine("sqlite:///:memory:")
    """
    url = url or DATABASE_URL
    kwargs = {"echo": False, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create every table registered on Base (no-op for existing tables)."""
    # models must be imported so their tables are registered
    from database import models  # noqa: F401

    Base.metadata.create_all(engine)
