"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .record import RecordRepository

__all__ = [
    "CategoryRepository",
    "RecordRepository",
]
