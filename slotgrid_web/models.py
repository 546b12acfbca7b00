"""Database models for the web API."""

import datetime as dt

from sqlmodel import Field, SQLModel

STATE_ROW_ID = 1


class GridStateRecord(SQLModel, table=True):
    """Single persisted row holding the whole grid state."""

    id: int = Field(default=STATE_ROW_ID, primary_key=True)
    rows: int
    cols: int
    blocked: str = Field(default="[]")
    names: str = Field(default="{}")
    updated_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )
