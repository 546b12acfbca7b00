"""Database utilities for the Slotgrid web API."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from sqlmodel import Session, SQLModel, create_engine

DATABASE_URL = os.getenv("SLOTGRID_DATABASE_URL", "sqlite:///./slotgrid.db")


def make_engine(url: str):
    """Return an engine for ``url`` with SQLite threading relaxed."""

    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(DATABASE_URL)

logger = logging.getLogger(__name__)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    with Session(engine) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def init_db() -> None:
    """Initialise database tables and seed the grid state row."""

    # Import models lazily to avoid circular imports during module initialisation.
    from . import models  # noqa: F401  # pylint: disable=unused-import
    from .store import GridStore

    logger.info("Ensuring database tables are created")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables confirmed")

    if GridStore(session_scope).ensure_row():
        logger.info("Seeded default grid state")
