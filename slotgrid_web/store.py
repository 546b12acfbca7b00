"""Persistence of the grid state in a single database row."""

from __future__ import annotations

import datetime as dt
import json
import logging
from contextlib import AbstractContextManager
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from slotgrid.errors import StorageFailure
from slotgrid.grid import GridState
from slotgrid.numbering import parse_coord

from .models import STATE_ROW_ID, GridStateRecord

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


def encode_blocked(state: GridState) -> str:
    return json.dumps(state.ordered_blocked())


def encode_names(state: GridState) -> str:
    return json.dumps({str(key): value for key, value in sorted(state.names.items())})


def decode_blocked(raw: str | None, rows: int, cols: int) -> frozenset[str]:
    """Return the blocked set stored in ``raw``.

    Malformed text yields an empty set; entries that are not coordinates of
    the ``rows`` x ``cols`` grid are dropped.
    """

    try:
        payload = json.loads(raw or "[]")
    except (TypeError, ValueError):
        logger.warning("Stored blocked list is not valid JSON, using empty list")
        return frozenset()
    if not isinstance(payload, list):
        logger.warning("Stored blocked list has unexpected type %s", type(payload).__name__)
        return frozenset()
    blocked = set()
    for item in payload:
        coord = parse_coord(str(item))
        if coord is None:
            continue
        row, col = coord
        if 0 <= row < rows and 0 <= col < cols:
            blocked.add(str(item))
    return frozenset(blocked)


def decode_names(raw: str | None) -> dict[int, str]:
    """Return the label mapping stored in ``raw``; malformed text yields ``{}``."""

    try:
        payload = json.loads(raw or "{}")
    except (TypeError, ValueError):
        logger.warning("Stored names mapping is not valid JSON, using empty mapping")
        return {}
    if not isinstance(payload, dict):
        logger.warning("Stored names mapping has unexpected type %s", type(payload).__name__)
        return {}
    names: dict[int, str] = {}
    for key, value in payload.items():
        try:
            num = int(key)
        except (TypeError, ValueError):
            continue
        if num <= 0 or value is None:
            continue
        text = str(value)
        if text.strip():
            names[num] = text
    return names


def record_to_state(record: GridStateRecord) -> GridState:
    return GridState(
        rows=record.rows,
        cols=record.cols,
        blocked=decode_blocked(record.blocked, record.rows, record.cols),
        names=decode_names(record.names),
    )


class GridStore:
    """Load and save the grid state row.

    ``session_factory`` returns a context manager yielding a session that
    commits on exit, typically :func:`slotgrid_web.database.session_scope`.
    """

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def load(self) -> GridState:
        """Return the stored state, or the default state when no row exists."""

        try:
            with self._session_factory() as session:
                record = session.get(GridStateRecord, STATE_ROW_ID)
                if record is None:
                    return GridState()
                return record_to_state(record)
        except SQLAlchemyError as exc:
            logger.error("Failed to load grid state: %s", exc, exc_info=True)
            raise StorageFailure("Unable to read grid state") from exc

    def save(self, state: GridState) -> GridState:
        """Overwrite the state row with ``state`` in a single transaction."""

        values: dict[str, Any] = {
            "rows": state.rows,
            "cols": state.cols,
            "blocked": encode_blocked(state),
            "names": encode_names(state),
            "updated_at": dt.datetime.now(dt.timezone.utc),
        }
        try:
            with self._session_factory() as session:
                record = session.get(GridStateRecord, STATE_ROW_ID)
                if record is None:
                    record = GridStateRecord(id=STATE_ROW_ID, **values)
                else:
                    for key, value in values.items():
                        setattr(record, key, value)
                session.add(record)
        except SQLAlchemyError as exc:
            logger.error("Failed to save grid state: %s", exc, exc_info=True)
            raise StorageFailure("Unable to write grid state") from exc
        return state

    def ensure_row(self) -> bool:
        """Insert the default state row when missing; return ``True`` if seeded."""

        try:
            with self._session_factory() as session:
                if session.get(GridStateRecord, STATE_ROW_ID) is not None:
                    return False
        except SQLAlchemyError as exc:
            raise StorageFailure("Unable to read grid state") from exc
        self.save(GridState())
        return True
