"""Category snapshot as served by the API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from sqlmodel import Field, SQLModel


class Category(SQLModel):
    """Named grouping for expenses or income.

    Records embed a denormalised copy of their category; the copy is valid at
    fetch time and is never resolved back against the server.
    """

    id: Optional[Union[int, str]] = Field(default=None)
    name: str = Field(max_length=64)
    description: str = Field(default="", max_length=255)
    created_at: Optional[datetime] = None
