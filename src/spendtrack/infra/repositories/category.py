"""API implementation of the category repository."""

from __future__ import annotations

from typing import Optional

from ...models.category import Category
from ...models.record import RecordId
from ..api import ApiClient
from .payloads import category_body, parse_category, parse_created, parse_many


class ApiCategoryRepository:
    """Expense categories managed under ``/api/expenses-categories``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[Category]:
        """List all categories ordered by name."""
        rows = parse_many(
            self.client.get("/expenses-categories"), parse_category, resource="categories"
        )
        return sorted(rows, key=lambda c: c.name.casefold())

    def create(self, category: Category) -> Optional[Category]:
        """Create a category."""
        body = self.client.post("/expenses-categories", category_body(category))
        return parse_created(body, parse_category, resource="category")

    def update(self, category: Category) -> Optional[Category]:
        """Rename or re-describe an existing category."""
        if category.id is None:
            raise ValueError("Cannot update a category without an id")
        body = self.client.put(f"/expenses-categories/{category.id}", category_body(category))
        return parse_created(body, parse_category, resource="category")

    def delete(self, category_id: RecordId) -> None:
        """Delete a category by ID."""
        self.client.delete(f"/expenses-categories/{category_id}")
