"""Model exports."""

from .category import Category
from .record import Expense, Income, LedgerRecord, RecordId

__all__ = [
    "Category",
    "Expense",
    "Income",
    "LedgerRecord",
    "RecordId",
]
