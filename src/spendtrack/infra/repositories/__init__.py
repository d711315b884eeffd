"""Concrete repository implementations backed by the REST API."""

from .category import ApiCategoryRepository
from .expense import ApiExpenseRepository
from .income import ApiIncomeRepository

__all__ = [
    "ApiCategoryRepository",
    "ApiExpenseRepository",
    "ApiIncomeRepository",
]
