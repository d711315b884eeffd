"""API-backed repositories and payload parsing."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from spendtrack.errors import NotFoundError
from spendtrack.infra.repositories import (
    ApiCategoryRepository,
    ApiExpenseRepository,
    ApiIncomeRepository,
)
from spendtrack.infra.repositories.payloads import PayloadError, parse_timestamp
from spendtrack.models import Category, Expense, Income
from spendtrack.services.list_view import ASCENDING
from spendtrack.services.screens import expense_controller
from tests.conftest import FakeRecordRepository, json_response, text_response

EXPENSE_ROWS = [
    {
        "id": 7,
        "description": "Groceries",
        "amount": "42.50",
        "createdAt": [2024, 3, 9, 18, 30],
        "category": {"id": 1, "categoryName": "Food"},
        "fileUrl": "uploads/receipt.png",
    },
    {"id": 8, "description": "Bus", "amount": 2, "createdAt": None, "category": None},
]


def test_parse_timestamp_accepts_arrays_and_iso_strings():
    assert parse_timestamp([2024, 3, 9]) == datetime(2024, 3, 9)
    assert parse_timestamp([2024, 3, 9, 18, 30, 5, 123456789]) == datetime(2024, 3, 9, 18, 30, 5)
    assert parse_timestamp("2024-03-09T18:30:00") == datetime(2024, 3, 9, 18, 30)
    assert parse_timestamp("2024-03-09T18:30:00Z") == datetime(2024, 3, 9, 18, 30)
    assert parse_timestamp("2024-03-09T20:30:00+02:00") == datetime(2024, 3, 9, 18, 30)
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


@pytest.mark.parametrize("raw", [[2024, 3], {"year": 2024}, 1700000000])
def test_parse_timestamp_rejects_other_shapes(raw):
    with pytest.raises(ValueError):
        parse_timestamp(raw)


def test_expense_list_parses_wire_fields(api_client, http_session):
    http_session.queue(json_response(200, EXPENSE_ROWS))
    repo = ApiExpenseRepository(api_client)

    first, second = repo.list_all()

    assert http_session.calls[0]["url"] == "http://testserver/api/expenses"
    assert first.id == 7
    assert first.amount == 42.5
    assert first.created_at == datetime(2024, 3, 9, 18, 30)
    assert first.category_name == "Food"
    assert first.file_url == "uploads/receipt.png"
    assert second.category is None
    assert second.category_name == ""
    assert second.created_at is None
    assert second.file_url is None


def test_expense_categories_and_delete_endpoints(api_client, http_session):
    http_session.queue(json_response(200, [{"id": 1, "categoryName": "Food", "description": "Meals"}]))
    repo = ApiExpenseRepository(api_client)

    (category,) = repo.list_categories()
    repo.delete(7)

    assert category.name == "Food"
    assert category.description == "Meals"
    assert [c["url"] for c in http_session.calls] == [
        "http://testserver/api/expenses/categories",
        "http://testserver/api/expenses/7",
    ]
    assert http_session.calls[1]["method"] == "DELETE"


def test_get_by_id_parses_single_object(api_client, http_session):
    http_session.queue(json_response(200, EXPENSE_ROWS[0]))

    expense = ApiExpenseRepository(api_client).get_by_id(7)

    assert expense.description == "Groceries"


def test_delete_missing_record_raises_not_found(api_client, http_session):
    http_session.queue(json_response(404, {"message": "Expense not found"}))

    with pytest.raises(NotFoundError, match="Expense not found"):
        ApiExpenseRepository(api_client).delete(99)


def test_income_repository_uses_income_routes(api_client, http_session):
    http_session.queue(
        json_response(
            200,
            [{"id": "a1", "source": "Employer", "amount": 1200, "createdAt": "2024-05-01T09:00:00"}],
        ),
        json_response(200, [{"id": 10, "categoryName": "Salary"}]),
    )
    repo = ApiIncomeRepository(api_client)

    (income,) = repo.list_all()
    (category,) = repo.list_categories()
    repo.delete("a1")

    assert income.source == "Employer"
    assert income.amount == 1200.0
    assert category.name == "Salary"
    assert [c["url"] for c in http_session.calls] == [
        "http://testserver/api/income",
        "http://testserver/api/income/categories",
        "http://testserver/api/income/a1",
    ]


def test_category_repository_sorts_by_name(api_client, http_session):
    http_session.queue(
        json_response(
            200,
            [{"id": 2, "categoryName": "transport"}, {"id": 1, "categoryName": "Food"}],
        )
    )
    repo = ApiCategoryRepository(api_client)

    assert [c.name for c in repo.list_all()] == ["Food", "transport"]
    repo.delete(2)
    assert http_session.calls[-1]["url"] == "http://testserver/api/expenses-categories/2"


def test_empty_body_is_an_empty_list(api_client, http_session):
    http_session.queue(json_response(200))

    assert ApiExpenseRepository(api_client).list_all() == []


def test_non_list_payload_is_rejected(api_client, http_session):
    http_session.queue(json_response(200, {"expenses": []}))

    with pytest.raises(PayloadError, match="Expected a list"):
        ApiExpenseRepository(api_client).list_all()


def test_row_without_id_is_rejected(api_client, http_session):
    http_session.queue(json_response(200, [{"description": "No id"}]))

    with pytest.raises(PayloadError, match="Malformed expenses payload"):
        ApiExpenseRepository(api_client).list_all()


def test_bad_amount_is_rejected(api_client, http_session):
    http_session.queue(json_response(200, [{"id": 1, "amount": "lots"}]))

    with pytest.raises(PayloadError):
        ApiIncomeRepository(api_client).list_all()


def test_mixed_timestamp_encodings_sort_together(api_client, http_session):
    http_session.queue(
        json_response(
            200,
            [
                {"id": 1, "description": "Array", "createdAt": [2024, 3, 9, 18, 0]},
                {"id": 2, "description": "Zulu", "createdAt": "2024-03-09T19:00:00Z"},
                {"id": 3, "description": "Offset", "createdAt": "2024-03-09T19:30:00+02:00"},
            ],
        )
    )
    records = ApiExpenseRepository(api_client).list_all()
    controller = expense_controller(FakeRecordRepository(records))

    controller.ingest(records)
    assert [r.id for r in controller.filtered_records] == [2, 1, 3]

    controller.set_sort("created_at", ASCENDING)
    assert [r.id for r in controller.filtered_records] == [3, 1, 2]


def test_expense_create_sends_multipart_expense_part(api_client, http_session):
    http_session.queue(json_response(200, {"id": 9, "description": "Lunch", "amount": 12.5}))
    repo = ApiExpenseRepository(api_client)

    created = repo.create(Expense(description="Lunch", amount=12.5, category=Category(id=1, name="Food")))

    call = http_session.calls[0]
    assert (call["method"], call["url"]) == ("POST", "http://testserver/api/expenses/create")
    assert call["json"] is None
    name, body, content_type = call["files"]["expense"]
    assert name is None and content_type == "application/json"
    assert json.loads(body) == {"description": "Lunch", "amount": 12.5, "category": {"id": 1}}
    assert created.id == 9


def test_expense_update_puts_json_to_record_route(api_client, http_session):
    repo = ApiExpenseRepository(api_client)

    result = repo.update(Expense(id=7, description="Dinner", amount=20, category=None))

    call = http_session.calls[0]
    assert (call["method"], call["url"]) == ("PUT", "http://testserver/api/expenses/7")
    assert call["json"] == {"description": "Dinner", "amount": 20.0, "category": None}
    assert result is None


def test_update_without_id_is_refused(api_client, http_session):
    with pytest.raises(ValueError):
        ApiExpenseRepository(api_client).update(Expense(description="x", amount=1))
    with pytest.raises(ValueError):
        ApiIncomeRepository(api_client).update(Income(source="x", amount=1))
    with pytest.raises(ValueError):
        ApiCategoryRepository(api_client).update(Category(name="x"))
    assert http_session.calls == []


def test_income_create_and_update_send_full_category(api_client, http_session):
    salary = Category(id=10, name="Salary", description="Pay", created_at=datetime(2024, 1, 2, 3, 4))
    http_session.queue(text_response(200, "Income saved"))
    repo = ApiIncomeRepository(api_client)

    assert repo.create(Income(source="Employer", amount=1200, category=salary)) is None
    repo.update(Income(id="a1", source="Employer", amount=1300, category=salary))

    create_call, update_call = http_session.calls
    assert (create_call["method"], create_call["url"]) == ("POST", "http://testserver/api/income/create")
    assert (update_call["method"], update_call["url"]) == ("PUT", "http://testserver/api/income/a1")
    assert update_call["json"] == {
        "source": "Employer",
        "amount": 1300.0,
        "category": {
            "id": 10,
            "categoryName": "Salary",
            "description": "Pay",
            "createdAt": "2024-01-02T03:04:00",
        },
    }


def test_category_create_and_update_bodies(api_client, http_session):
    http_session.queue(json_response(200, {"id": 5, "categoryName": "Books", "description": ""}))
    repo = ApiCategoryRepository(api_client)

    created = repo.create(Category(name="Books"))
    repo.update(Category(id=5, name="Books & Comics", description="Reading"))

    assert created.id == 5 and created.name == "Books"
    assert http_session.calls[0]["url"] == "http://testserver/api/expenses-categories"
    assert http_session.calls[0]["json"] == {"categoryName": "Books", "description": ""}
    assert http_session.calls[1]["method"] == "PUT"
    assert http_session.calls[1]["url"] == "http://testserver/api/expenses-categories/5"
    assert http_session.calls[1]["json"] == {
        "categoryName": "Books & Comics",
        "description": "Reading",
        "id": 5,
    }
