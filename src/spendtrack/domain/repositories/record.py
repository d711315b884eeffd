"""Record repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

from ...models.category import Category
from ...models.record import LedgerRecord, RecordId

RecordT = TypeVar("RecordT", bound=LedgerRecord)


class RecordRepository(Protocol[RecordT]):
    """Fetch/edit/delete collaborator behind one list screen and its form.

    Implementations raise ``ServiceError`` subclasses on failure.
    """

    def list_all(self) -> list[RecordT]:
        """Return the full collection in server order."""
        ...

    def get_by_id(self, record_id: RecordId) -> RecordT:
        """Return one record, for pre-filling the edit form."""
        ...

    def list_categories(self) -> list[Category]:
        """Return the categories records on this screen may reference."""
        ...

    def create(self, record: RecordT) -> Optional[RecordT]:
        """Create a record; returns the stored copy when the server sends one."""
        ...

    def update(self, record: RecordT) -> Optional[RecordT]:
        """Replace an existing record identified by ``record.id``."""
        ...

    def delete(self, record_id: RecordId) -> None:
        """Delete a record by ID."""
        ...
