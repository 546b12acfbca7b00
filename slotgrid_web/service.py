"""Admin mutation service: load, apply, persist."""

from __future__ import annotations

import logging
from typing import Any, Optional

from slotgrid import grid
from slotgrid.grid import GridState

from .store import GridStore

logger = logging.getLogger(__name__)


class GridService:
    """Apply admin commands against the stored grid state.

    Each method performs one read-modify-write cycle and returns the new
    state.  Invalid input raises before anything is written; publishing the
    result to viewers is left to the caller.
    """

    def __init__(self, store: GridStore):
        self.store = store

    def current(self) -> GridState:
        return self.store.load()

    def generate(self, rows: Any, cols: Any) -> GridState:
        state = grid.generate(self.store.load(), rows, cols)
        self.store.save(state)
        logger.info("Generated %sx%s grid", state.rows, state.cols)
        return state

    def reset(self) -> GridState:
        state = grid.reset(self.store.load())
        self.store.save(state)
        logger.info("Reset grid %sx%s", state.rows, state.cols)
        return state

    def update(
        self,
        box_num: Any,
        subtitle: Optional[Any] = None,
        visibility: Any = None,
    ) -> GridState:
        state = grid.update(self.store.load(), box_num, subtitle, visibility)
        self.store.save(state)
        logger.info("Updated slot %s (visibility=%s)", box_num, visibility or "show")
        return state
