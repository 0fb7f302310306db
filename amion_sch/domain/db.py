"""Engines and sessions for the schedule import database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_DB_URL = "sqlite:///amion.db"

# One engine (and its connection pool) per database URL
_engines: Dict[str, Engine] = {}


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    engine = _engines.get(db_url)
    if engine is None:
        engine = create_engine(db_url, echo=echo)
        _engines[db_url] = engine
    return engine


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Create any missing tables; existing imports are left untouched."""
    Base.metadata.create_all(create_db_engine(db_url))
    logger.info("Database initialized: %s", db_url)


def get_session_factory(db_url: str = DEFAULT_DB_URL) -> sessionmaker:
    # Stored imports stay readable after the session commits
    return sessionmaker(bind=create_db_engine(db_url), expire_on_commit=False)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """Get a new database session."""
    return get_session_factory(db_url)()


@contextmanager
def session_scope(db_url: str = DEFAULT_DB_URL) -> Iterator[Session]:
    """
    Session that commits when the block succeeds, rolls back when it raises,
    and is always closed.
    """
    session = get_session(db_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Rolled back session on %s", db_url)
        raise
    finally:
        session.close()
