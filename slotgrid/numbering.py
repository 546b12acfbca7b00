"""Snake numbering of grid slots.

Slots are numbered column by column.  Even columns are walked bottom to top,
odd columns top to bottom, so neighbouring slots across a column boundary
keep neighbouring numbers.  Blocked cells are skipped and do not consume a
number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

COORD_PATTERN = re.compile(r"(0|[1-9]\d*)-(0|[1-9]\d*)")


def format_coord(row: int, col: int) -> str:
    """Return the ``"{row}-{col}"`` identifier of a cell."""

    return f"{row}-{col}"


def parse_coord(value: str) -> Optional[tuple[int, int]]:
    """Return ``(row, col)`` for ``value`` or ``None`` when it is malformed."""

    match = COORD_PATTERN.fullmatch(str(value or ""))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def iter_snake(rows: int, cols: int) -> Iterator[tuple[int, int]]:
    """Yield every ``(row, col)`` of the grid in traversal order."""

    for col in range(max(cols, 0)):
        if col % 2 == 0:
            row_order = range(rows - 1, -1, -1)
        else:
            row_order = range(rows)
        for row in row_order:
            yield row, col


@dataclass(frozen=True)
class SlotMapping:
    """Bidirectional mapping between coordinates and slot numbers."""

    coord_to_number: dict[str, int] = field(default_factory=dict)
    number_to_coord: dict[int, str] = field(default_factory=dict)

    @property
    def visible_count(self) -> int:
        return len(self.number_to_coord)

    def coord_of(self, number: int) -> Optional[str]:
        return self.number_to_coord.get(number)

    def number_of(self, coord: str) -> Optional[int]:
        return self.coord_to_number.get(coord)


def number(rows: int, cols: int, blocked: Iterable[str] = ()) -> SlotMapping:
    """Assign sequence numbers to all non-blocked cells.

    The result is a pure function of its input: the same geometry and blocked
    set always produce the same mapping.  An empty grid or a grid where every
    cell is blocked yields an empty mapping.
    """

    blocked_set = set(blocked or ())
    coord_to_number: dict[str, int] = {}
    number_to_coord: dict[int, str] = {}
    count = 1
    for row, col in iter_snake(rows, cols):
        cid = format_coord(row, col)
        if cid in blocked_set:
            continue
        coord_to_number[cid] = count
        number_to_coord[count] = cid
        count += 1
    return SlotMapping(coord_to_number, number_to_coord)
