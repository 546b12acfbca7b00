from . import errors, grid, numbering
from .grid import GridState
from .numbering import SlotMapping, number

__all__ = ["GridState", "SlotMapping", "errors", "grid", "number", "numbering"]
