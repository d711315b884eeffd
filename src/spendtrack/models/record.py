"""Income and expense records held by the list screens."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from sqlmodel import Field, SQLModel

from .category import Category

RecordId = Union[int, str]


class LedgerRecord(SQLModel):
    """Fields shared by every row the list screens display."""

    id: Optional[RecordId] = Field(default=None)
    amount: Optional[float] = Field(default=None, description="Always positive; the screen decides the sign")
    created_at: Optional[datetime] = None
    category: Optional[Category] = None

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else ""


class Expense(LedgerRecord):
    """A single outgoing payment."""

    description: str = Field(default="", max_length=255)
    file_url: Optional[str] = None


class Income(LedgerRecord):
    """A single incoming payment."""

    source: str = Field(default="", max_length=255)
