"""Controller wiring for the Expenses and Income screens."""

from __future__ import annotations

from operator import attrgetter

from ..domain.repositories import RecordRepository
from ..models.record import Expense, Income
from .list_view import (
    CATEGORY,
    DESCENDING,
    MIN_AMOUNT,
    ON_DATE,
    TEXT,
    FilterField,
    ListViewConfig,
    ListViewController,
)

_CATEGORY_NAME = attrgetter("category_name")
_AMOUNT = attrgetter("amount")
_CREATED_AT = attrgetter("created_at")

# Display labels for the sort dropdowns, keyed by sort-field name.
EXPENSE_SORT_LABELS = {"description": "Description", "amount": "Amount", "created_at": "Date"}
INCOME_SORT_LABELS = {"source": "Source", "amount": "Amount", "created_at": "Date"}


def expense_list_config(page_size: int = 5) -> ListViewConfig:
    return ListViewConfig(
        name="expenses",
        filter_fields={
            "description": FilterField(TEXT, attrgetter("description")),
            "category": FilterField(CATEGORY, _CATEGORY_NAME),
            "amount": FilterField(MIN_AMOUNT, _AMOUNT),
            "date": FilterField(ON_DATE, _CREATED_AT),
        },
        sort_fields={
            "description": attrgetter("description"),
            "amount": _AMOUNT,
            "created_at": _CREATED_AT,
        },
        default_sort="created_at",
        default_direction=DESCENDING,
        page_size=page_size,
    )


def income_list_config(page_size: int = 5) -> ListViewConfig:
    return ListViewConfig(
        name="income",
        filter_fields={
            "source": FilterField(TEXT, attrgetter("source")),
            "category": FilterField(CATEGORY, _CATEGORY_NAME),
            "amount": FilterField(MIN_AMOUNT, _AMOUNT),
            "date": FilterField(ON_DATE, _CREATED_AT),
        },
        sort_fields={
            "source": attrgetter("source"),
            "amount": _AMOUNT,
            "created_at": _CREATED_AT,
        },
        default_sort="created_at",
        default_direction=DESCENDING,
        page_size=page_size,
    )


def expense_controller(
    repository: RecordRepository[Expense], *, page_size: int = 5
) -> ListViewController[Expense]:
    return ListViewController(expense_list_config(page_size), repository)


def income_controller(
    repository: RecordRepository[Income], *, page_size: int = 5
) -> ListViewController[Income]:
    return ListViewController(income_list_config(page_size), repository)
