"""Pydantic/SQLModel schemas for the web API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class GridSnapshot(SQLModel):
    rows: int
    cols: int
    blocked: List[str] = Field(default_factory=list)
    names: Dict[str, str] = Field(default_factory=dict)


class SlotRead(SQLModel):
    number: int
    coord: str
    row: int
    col: int
    label: Optional[str] = None


class GenerateRequest(SQLModel):
    # Raw values so that validation errors come from the grid module.
    rows: Any = None
    cols: Any = None


class UpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    box_num: Any = PydanticField(default=None, alias="boxNum")
    subtitle: Any = None
    visibility: Any = None


class AdminLogin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: Optional[str] = None
    password: Optional[str] = PydanticField(default=None, alias="pass")


class Token(SQLModel):
    ok: bool = True
    access_token: str
    token_type: str = "bearer"


class AdminRead(SQLModel):
    user: str


class StatusResponse(SQLModel):
    ok: bool = True
