"""Validation and save helpers behind the create/edit forms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..domain.repositories import CategoryRepository, RecordRepository
from ..logging_config import get_logger
from ..models.category import Category
from ..models.record import Expense, Income, RecordId

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordDraft:
    """Validated form input for an expense or income entry."""

    text: str
    amount: float
    category: Category


def parse_amount(raw: Any) -> float:
    """Parse the amount box; amounts are always entered as positive numbers."""

    text = str(raw if raw is not None else "").strip()
    if not text:
        raise ValueError("Amount is required.")
    try:
        value = float(text)
    except ValueError:
        raise ValueError("Amount must be a number.") from None
    if value <= 0:
        raise ValueError("Amount must be positive.")
    return value


def build_draft(
    text: Optional[str],
    raw_amount: Any,
    category: Optional[Category],
    *,
    text_label: str,
) -> RecordDraft:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError(f"{text_label} is required.")
    amount = parse_amount(raw_amount)
    if category is None:
        raise ValueError("Select a category.")
    return RecordDraft(text=cleaned, amount=amount, category=category)


def save_expense(
    repository: RecordRepository[Expense],
    draft: RecordDraft,
    *,
    existing_id: Optional[RecordId] = None,
) -> Optional[Expense]:
    """Create a new expense, or update ``existing_id`` when given."""

    expense = Expense(
        id=existing_id,
        description=draft.text,
        amount=draft.amount,
        category=draft.category,
    )
    if existing_id is None:
        logger.info("Creating expense", extra={"category_id": draft.category.id})
        return repository.create(expense)
    logger.info("Updating expense", extra={"record_id": existing_id})
    return repository.update(expense)


def save_income(
    repository: RecordRepository[Income],
    draft: RecordDraft,
    *,
    existing_id: Optional[RecordId] = None,
) -> Optional[Income]:
    """Create a new income entry, or update ``existing_id`` when given."""

    income = Income(
        id=existing_id,
        source=draft.text,
        amount=draft.amount,
        category=draft.category,
    )
    if existing_id is None:
        logger.info("Creating income", extra={"category_id": draft.category.id})
        return repository.create(income)
    logger.info("Updating income", extra={"record_id": existing_id})
    return repository.update(income)


def save_category(
    repository: CategoryRepository,
    name: Optional[str],
    description: Optional[str] = "",
    *,
    existing_id: Optional[RecordId] = None,
) -> Optional[Category]:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Category name is required.")
    category = Category(id=existing_id, name=cleaned, description=(description or "").strip())
    if existing_id is None:
        return repository.create(category)
    return repository.update(category)
