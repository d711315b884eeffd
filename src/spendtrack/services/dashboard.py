"""Dashboard rollups computed from the fetched income and expense lists."""

from __future__ import annotations

from typing import Iterable

from ..models.record import Expense, Income

UNCATEGORIZED = "Uncategorized"


def _amount(record) -> float:
    return record.amount or 0.0


def compute_summary(expenses: Iterable[Expense], incomes: Iterable[Income]) -> dict[str, float]:
    """Compute income, expenses, and net totals."""

    income = sum(_amount(i) for i in incomes)
    spent = sum(_amount(e) for e in expenses)
    return {"income": income, "expenses": spent, "net": income - spent}


def compute_spending_by_category(expenses: Iterable[Expense]) -> list[dict[str, object]]:
    """Roll up expense totals by category name, largest first."""

    totals: dict[str, float] = {}
    for expense in expenses:
        name = expense.category_name or UNCATEGORIZED
        totals[name] = totals.get(name, 0.0) + _amount(expense)

    breakdown = [{"name": name, "amount": total} for name, total in totals.items()]
    breakdown.sort(key=lambda entry: entry["amount"], reverse=True)
    return breakdown


def top_categories(
    breakdown: Iterable[dict[str, object]], limit: int = 5
) -> list[dict[str, object]]:
    """Return the top N categories from a breakdown list."""

    return list(breakdown)[:limit]
