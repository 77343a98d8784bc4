"""SQLAlchemy engine and session helpers.

The case store targets a local SQLite file by default; an in-memory URL is
supported for tests. No queries live here; this module only manages the
connection lifecycle.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from casesync.db.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///casesync.db"

# Module-level cached Engine so every store in the process shares one pool
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def build_engine(url: str) -> Engine:
    """Create an Engine for `url` and make sure the store table exists.

    In-memory SQLite URLs use a StaticPool so all sessions see the same
    database.
    """
    kwargs: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs.update({
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        })
    engine = create_engine(url, **kwargs)
    Base.metadata.create_all(engine)
    return engine


def get_engine(url: str | None = None) -> Engine:
    """Return a process-wide Engine, rebuilding it when the URL changes."""
    global _ENGINE, _ENGINE_URL
    resolved_url = url or DEFAULT_DATABASE_URL

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        _ENGINE = build_engine(resolved_url)
        _ENGINE_URL = resolved_url
        logger.info("db_engine_created url=%s", resolved_url)

    return _ENGINE


def get_sessionmaker(engine: Engine | None = None) -> sessionmaker:
    engine = engine or get_engine()
    return sessionmaker(bind=engine, future=True, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error."""
    factory = get_sessionmaker(engine)
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.error("DB session error; transaction rolled back", exc_info=True)
        raise
    finally:
        session.close()


__all__ = [
    "DEFAULT_DATABASE_URL",
    "build_engine",
    "get_engine",
    "get_sessionmaker",
    "session_scope",
]
