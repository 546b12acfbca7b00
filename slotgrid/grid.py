"""Grid state and the admin mutations applied to it.

All mutations are pure: they take the current :class:`GridState` and return a
new one, raising :mod:`slotgrid.errors` exceptions for invalid input.  Loading,
persisting and broadcasting the result is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from . import layout
from .errors import InvalidArgument, NotFound
from .numbering import SlotMapping, format_coord, iter_snake, number, parse_coord

logger = logging.getLogger(__name__)


@dataclass
class GridState:
    """Authoritative grid: dimensions, hidden cells and slot labels."""

    rows: int = layout.DEFAULT_ROWS
    cols: int = layout.DEFAULT_COLS
    blocked: frozenset[str] = field(default_factory=frozenset)
    names: dict[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.blocked = frozenset(self.blocked)
        self.names = dict(self.names)

    def mapping(self) -> SlotMapping:
        return number(self.rows, self.cols, self.blocked)

    def copy(self, **changes: Any) -> "GridState":
        values = {
            "rows": self.rows,
            "cols": self.cols,
            "blocked": self.blocked,
            "names": dict(self.names),
        }
        values.update(changes)
        return GridState(**values)

    def ordered_blocked(self) -> list[str]:
        """Return blocked coordinates in traversal order.

        Coordinates outside the current grid are appended last in sorted
        order so nothing is silently lost from the snapshot.
        """

        inside = [
            format_coord(row, col)
            for row, col in iter_snake(self.rows, self.cols)
            if format_coord(row, col) in self.blocked
        ]
        outside = sorted(self.blocked.difference(inside))
        return inside + outside

    def snapshot(self) -> dict[str, Any]:
        """Return the wire representation sent to viewers."""

        return {
            "rows": self.rows,
            "cols": self.cols,
            "blocked": self.ordered_blocked(),
            "names": {str(key): value for key, value in sorted(self.names.items())},
        }

    def slots(self) -> list[dict[str, Any]]:
        """Return every visible slot with its coordinate and label."""

        result = []
        for num, cid in sorted(self.mapping().number_to_coord.items()):
            row, col = parse_coord(cid)
            result.append(
                {
                    "number": num,
                    "coord": cid,
                    "row": row,
                    "col": col,
                    "label": self.names.get(num),
                }
            )
        return result


def _positive_int(value: Any, name: str) -> int:
    """Coerce ``value`` to a positive integer or raise :class:`InvalidArgument`."""

    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"{name} required")
    if isinstance(value, int):
        result = value
    elif isinstance(value, float) and value.is_integer():
        result = int(value)
    elif isinstance(value, str) and value.strip().isdecimal():
        try:
            result = int(value.strip())
        except ValueError as exc:
            raise InvalidArgument(f"{name} must be a positive integer") from exc
    else:
        raise InvalidArgument(f"{name} must be a positive integer")
    if result <= 0:
        raise InvalidArgument(f"{name} must be a positive integer")
    return result


def generate(state: GridState, rows: Any, cols: Any) -> GridState:
    """Replace the whole grid with an empty ``rows`` x ``cols`` one."""

    if rows is None or cols is None:
        raise InvalidArgument("rows and cols required")
    rows_value = _positive_int(rows, "rows")
    cols_value = _positive_int(cols, "cols")
    if rows_value > layout.MAX_DIMENSION or cols_value > layout.MAX_DIMENSION:
        raise InvalidArgument(
            f"rows and cols must not exceed {layout.MAX_DIMENSION}"
        )
    return GridState(rows=rows_value, cols=cols_value)


def reset(state: GridState) -> GridState:
    """Unhide every cell and drop all labels, keeping the dimensions."""

    return GridState(rows=state.rows, cols=state.cols)


def prune(state: GridState) -> GridState:
    """Drop blocked cells outside the grid and labels of unknown numbers."""

    blocked = set()
    for cid in state.blocked:
        coord = parse_coord(cid)
        if coord is None:
            continue
        row, col = coord
        if 0 <= row < state.rows and 0 <= col < state.cols:
            blocked.add(cid)
    visible = number(state.rows, state.cols, blocked).number_to_coord
    names = {key: value for key, value in state.names.items() if key in visible}
    dropped = len(state.names) - len(names)
    if dropped:
        logger.debug("Pruned %s stale labels", dropped)
    return state.copy(blocked=frozenset(blocked), names=names)


def update(
    state: GridState,
    box_num: Any,
    subtitle: Optional[Any] = None,
    visibility: Any = None,
) -> GridState:
    """Hide a slot or set/clear its label.

    ``visibility == "hide"`` blocks the cell currently carrying ``box_num``;
    every later slot moves down by one number on the next numbering pass.
    Any other visibility updates the label.  A blank ``subtitle`` removes the
    label; labels may be set for numbers that do not exist yet.
    """

    num = _positive_int(box_num, "boxNum")

    if visibility == layout.VISIBILITY_HIDE:
        target = state.mapping().coord_of(num)
        if target is None:
            raise NotFound(num)
        names = dict(state.names)
        names.pop(num, None)
        return prune(state.copy(blocked=state.blocked | {target}, names=names))

    names = dict(state.names)
    text = "" if subtitle is None else str(subtitle).strip()
    if text:
        names[num] = text
    else:
        names.pop(num, None)
    return state.copy(names=names)

