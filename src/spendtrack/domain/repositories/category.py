"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category
from ...models.record import RecordId


class CategoryRepository(Protocol):
    """Repository for managing expense categories."""

    def list_all(self) -> list[Category]:
        """List all categories."""
        ...

    def create(self, category: Category) -> Optional[Category]:
        """Create a category."""
        ...

    def update(self, category: Category) -> Optional[Category]:
        """Update the category identified by ``category.id``."""
        ...

    def delete(self, category_id: RecordId) -> None:
        """Delete a category by ID."""
        ...
