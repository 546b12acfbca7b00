"""Shared configuration for the slot grid.

This module centralizes grid-related constants used by both the core and the
web layer.  The defaults can be overridden through environment variables so
a deployment can start with a grid matching the physical shelf layout.
"""

from __future__ import annotations

import os

# Default grid -----------------------------------------------------------------

# Dimensions used when no state has been stored yet and for the seeded row.
DEFAULT_ROWS = int(os.getenv("SLOTGRID_DEFAULT_ROWS", "3"))
DEFAULT_COLS = int(os.getenv("SLOTGRID_DEFAULT_COLS", "3"))

# Upper bound accepted by ``generate`` for either dimension.  A 100x100 grid
# already yields 10 000 slots which is far beyond any realistic shelf.
MAX_DIMENSION = int(os.getenv("SLOTGRID_MAX_DIMENSION", "100"))

# Visibility ---------------------------------------------------------------------

# Only ``hide`` is special; any other visibility value is a label update.
VISIBILITY_HIDE = "hide"
