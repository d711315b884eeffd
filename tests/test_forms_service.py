"""Validation and create/update dispatch behind the record forms."""

from __future__ import annotations

import pytest

from spendtrack.models import Category
from spendtrack.services import forms
from tests.conftest import FOOD, SALARY, FakeRecordRepository


class _CategoryRepo:
    def __init__(self):
        self.created = []
        self.updated = []

    def create(self, category):
        self.created.append(category)
        return category

    def update(self, category):
        self.updated.append(category)
        return category


@pytest.mark.parametrize(
    "raw,message",
    [("", "Amount is required."), ("  ", "Amount is required."), ("ten", "Amount must be a number."), ("0", "Amount must be positive."), ("-4", "Amount must be positive.")],
)
def test_parse_amount_rejects_bad_input(raw, message):
    with pytest.raises(ValueError, match=message):
        forms.parse_amount(raw)


def test_parse_amount_accepts_numbers():
    assert forms.parse_amount(" 12.50 ") == 12.5
    assert forms.parse_amount(3) == 3.0


def test_build_draft_checks_each_field():
    with pytest.raises(ValueError, match="Description is required."):
        forms.build_draft("  ", "5", FOOD, text_label="Description")
    with pytest.raises(ValueError, match="Select a category."):
        forms.build_draft("Lunch", "5", None, text_label="Description")

    draft = forms.build_draft(" Lunch ", "5", FOOD, text_label="Description")

    assert draft == forms.RecordDraft(text="Lunch", amount=5.0, category=FOOD)


def test_save_expense_creates_without_id_and_updates_with_one():
    repo = FakeRecordRepository()
    draft = forms.RecordDraft(text="Lunch", amount=5.0, category=FOOD)

    forms.save_expense(repo, draft)
    forms.save_expense(repo, draft, existing_id=7)

    (created,) = repo.created
    (updated,) = repo.updated
    assert created.id is None and created.description == "Lunch"
    assert updated.id == 7 and updated.category == FOOD


def test_save_income_maps_text_to_source():
    repo = FakeRecordRepository()

    forms.save_income(repo, forms.RecordDraft(text="Employer", amount=900.0, category=SALARY))

    assert repo.created[0].source == "Employer"
    assert repo.created[0].amount == 900.0


def test_save_category_requires_name_and_trims():
    repo = _CategoryRepo()
    with pytest.raises(ValueError, match="Category name is required."):
        forms.save_category(repo, "   ")

    forms.save_category(repo, " Books ", " Reading ")
    forms.save_category(repo, "Books", None, existing_id=5)

    assert repo.created == [Category(name="Books", description="Reading")]
    assert repo.updated[0].id == 5 and repo.updated[0].description == ""
