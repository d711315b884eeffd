"""Dashboard rollups."""

from __future__ import annotations

from spendtrack.services.dashboard import (
    compute_spending_by_category,
    compute_summary,
    top_categories,
)
from tests.conftest import FOOD, TRANSPORT, make_expense, make_income


def test_summary_totals_and_net():
    expenses = [make_expense(1, amount=20), make_expense(2, amount=5.5)]
    incomes = [make_income(1, amount=100), make_income(2, amount=None)]

    summary = compute_summary(expenses, incomes)

    assert summary == {"income": 100, "expenses": 25.5, "net": 74.5}


def test_summary_of_nothing_is_zero():
    assert compute_summary([], []) == {"income": 0, "expenses": 0, "net": 0}


def test_spending_by_category_largest_first():
    expenses = [
        make_expense(1, category=FOOD, amount=10),
        make_expense(2, category=TRANSPORT, amount=30),
        make_expense(3, category=FOOD, amount=15),
        make_expense(4, category=None, amount=1),
    ]

    breakdown = compute_spending_by_category(expenses)

    assert breakdown == [
        {"name": "Transport", "amount": 30},
        {"name": "Food", "amount": 25},
        {"name": "Uncategorized", "amount": 1},
    ]


def test_top_categories_limits_breakdown():
    breakdown = [{"name": str(n), "amount": float(10 - n)} for n in range(8)]

    assert [entry["name"] for entry in top_categories(breakdown, limit=3)] == ["0", "1", "2"]
    assert len(top_categories(breakdown)) == 5
