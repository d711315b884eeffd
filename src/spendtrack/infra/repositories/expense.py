"""API implementation of the expense repository."""

from __future__ import annotations

from typing import Optional

from ...models.category import Category
from ...models.record import Expense, RecordId
from ..api import ApiClient
from .payloads import (
    expense_body,
    parse_category,
    parse_created,
    parse_expense,
    parse_many,
    parse_one,
)


class ApiExpenseRepository:
    """Expenses served under ``/api/expenses``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[Expense]:
        """List all expenses in server order."""
        return parse_many(self.client.get("/expenses"), parse_expense, resource="expenses")

    def get_by_id(self, expense_id: RecordId) -> Expense:
        """Retrieve a single expense."""
        return parse_one(self.client.get(f"/expenses/{expense_id}"), parse_expense, resource="expense")

    def list_categories(self) -> list[Category]:
        """Categories offered by the expense filter."""
        return parse_many(
            self.client.get("/expenses/categories"), parse_category, resource="expense categories"
        )

    def create(self, expense: Expense) -> Optional[Expense]:
        """Create an expense.

        The endpoint takes ``multipart/form-data`` with the expense as a JSON
        part named ``expense``; an attachment part is never sent.
        """
        body = self.client.post_multipart("/expenses/create", {"expense": expense_body(expense)})
        return parse_created(body, parse_expense, resource="expense")

    def update(self, expense: Expense) -> Optional[Expense]:
        """Replace description, amount and category of an existing expense."""
        if expense.id is None:
            raise ValueError("Cannot update an expense without an id")
        body = self.client.put(f"/expenses/{expense.id}", expense_body(expense))
        return parse_created(body, parse_expense, resource="expense")

    def delete(self, expense_id: RecordId) -> None:
        """Delete an expense by ID."""
        self.client.delete(f"/expenses/{expense_id}")
