from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    is_directory: bool = Field(alias='isDirectory')
    size: int
    type: str
    modified: datetime


class MkdirRequest(BaseModel):
    name: str = ''
    parent: str = ''


class RenameRequest(BaseModel):
    old_path: str = Field(default='', alias='oldPath')
    new_name: str = Field(default='', alias='newName')


class ApiResponse(BaseModel):
    ok: bool
    message: str
    data: Optional[Any] = None
