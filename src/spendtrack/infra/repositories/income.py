"""API implementation of the income repository."""

from __future__ import annotations

from typing import Optional

from ...models.category import Category
from ...models.record import Income, RecordId
from ..api import ApiClient
from .payloads import (
    income_body,
    parse_category,
    parse_created,
    parse_income,
    parse_many,
    parse_one,
)


class ApiIncomeRepository:
    """Income records served under ``/api/income``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[Income]:
        return parse_many(self.client.get("/income"), parse_income, resource="income")

    def get_by_id(self, income_id: RecordId) -> Income:
        return parse_one(self.client.get(f"/income/{income_id}"), parse_income, resource="income")

    def list_categories(self) -> list[Category]:
        return parse_many(
            self.client.get("/income/categories"), parse_category, resource="income categories"
        )

    def create(self, income: Income) -> Optional[Income]:
        body = self.client.post("/income/create", income_body(income))
        return parse_created(body, parse_income, resource="income")

    def update(self, income: Income) -> Optional[Income]:
        if income.id is None:
            raise ValueError("Cannot update an income entry without an id")
        body = self.client.put(f"/income/{income.id}", income_body(income))
        return parse_created(body, parse_income, resource="income")

    def delete(self, income_id: RecordId) -> None:
        self.client.delete(f"/income/{income_id}")
