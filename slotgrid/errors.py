"""Domain exceptions shared by the core and the web layer.

Each error carries the HTTP status the API reports it with so the web layer
can translate them in a single exception handler.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for all grid errors."""

    status_code = 500
    code = "grid_error"

    def __init__(self, message: str | None = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class InvalidArgument(GridError):
    """Missing or malformed mutation input."""

    status_code = 400
    code = "invalid_argument"


class NotFound(GridError):
    """Slot number does not resolve to a visible cell."""

    status_code = 404
    code = "not_found"

    def __init__(self, box_num: int):
        self.box_num = box_num
        super().__init__(f"Box number {box_num} not found or already hidden")


class Unauthorized(GridError):
    """Missing, invalid or expired credential."""

    status_code = 401
    code = "unauthorized"


class StorageFailure(GridError):
    """Persistence layer unreachable or corrupt."""

    status_code = 500
    code = "storage_failure"
