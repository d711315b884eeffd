"""Pytest configuration and shared fixtures for SpendTrack tests.

Provides record factories, an in-memory repository that stands in for the REST
API behind a list screen, and a ``requests.Session`` subclass that records
outgoing calls and replays canned responses.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Iterable, Optional

import pytest
import requests

from spendtrack.config import TestConfig
from spendtrack.errors import NotFoundError, ServiceError
from spendtrack.infra.api import ApiClient
from spendtrack.models import Category, Expense, Income

# =============================================================================
# Factories
# =============================================================================

FOOD = Category(id=1, name="Food", description="Groceries and eating out")
TRANSPORT = Category(id=2, name="Transport", description="Bus, train, fuel")
SALARY = Category(id=10, name="Salary")


def make_expense(
    id: Any,
    description: str = "Item",
    category: Optional[Category] = FOOD,
    amount: Optional[float] = 1.0,
    created_at: Optional[str] = "2024-01-01",
) -> Expense:
    return Expense(
        id=id,
        description=description,
        category=category,
        amount=amount,
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


def make_income(
    id: Any,
    source: str = "Employer",
    category: Optional[Category] = SALARY,
    amount: Optional[float] = 100.0,
    created_at: Optional[str] = "2024-01-01",
) -> Income:
    return Income(
        id=id,
        source=source,
        category=category,
        amount=amount,
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


def scenario_expenses() -> list[Expense]:
    """The three-record collection used by the filter scenarios."""
    return [
        make_expense(1, "Coffee", FOOD, 5, "2024-01-01"),
        make_expense(2, "Bus", TRANSPORT, 2, "2024-01-02"),
        make_expense(3, "Cocoa", FOOD, 3, "2024-01-03"),
    ]


def numbered_expenses(count: int) -> list[Expense]:
    """``count`` expenses with amounts 1..count delivered in scrambled order."""
    order = sorted(range(1, count + 1), key=lambda n: (n * 7) % (count + 1))
    return [
        make_expense(n, f"Expense {n:02d}", FOOD, float(n), f"2024-02-{n:02d}")
        for n in order
    ]


# =============================================================================
# Repository double
# =============================================================================


class FakeRecordRepository:
    """In-memory stand-in for an API-backed record repository."""

    def __init__(
        self,
        records: Iterable[Any] = (),
        categories: Iterable[Category] = (FOOD, TRANSPORT),
    ):
        self.records = list(records)
        self.categories = list(categories)
        self.fetch_error: Optional[ServiceError] = None
        self.delete_error: Optional[ServiceError] = None
        self.category_error: Optional[ServiceError] = None
        self.save_error: Optional[ServiceError] = None
        self.deleted: list[Any] = []
        self.created: list[Any] = []
        self.updated: list[Any] = []
        self.fetch_count = 0

    def list_all(self) -> list[Any]:
        self.fetch_count += 1
        if self.fetch_error:
            raise self.fetch_error
        return list(self.records)

    def list_categories(self) -> list[Category]:
        if self.category_error:
            raise self.category_error
        return list(self.categories)

    def get_by_id(self, record_id: Any) -> Any:
        if self.fetch_error:
            raise self.fetch_error
        for record in self.records:
            if str(record.id) == str(record_id):
                return record
        raise NotFoundError("Record not found", status_code=404)

    def create(self, record: Any) -> Any:
        if self.save_error:
            raise self.save_error
        self.created.append(record)
        return record

    def update(self, record: Any) -> Any:
        if self.save_error:
            raise self.save_error
        self.updated.append(record)
        return record

    def delete(self, record_id: Any) -> None:
        if self.delete_error:
            raise self.delete_error
        self.deleted.append(record_id)
        self.records = [r for r in self.records if r.id != record_id]


@pytest.fixture
def expense_repo() -> FakeRecordRepository:
    return FakeRecordRepository(scenario_expenses())


# =============================================================================
# HTTP doubles
# =============================================================================


def json_response(status: int = 200, body: Any = None, *, raw: Optional[bytes] = None) -> requests.Response:
    """Build a real ``requests.Response`` carrying ``body`` as JSON."""
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


def text_response(status: int = 200, text: str = "") -> requests.Response:
    """Build a ``text/plain`` response like the password endpoints return."""
    response = requests.Response()
    response.status_code = status
    response._content = text.encode("utf-8")
    response.headers["Content-Type"] = "text/plain;charset=UTF-8"
    response.encoding = "utf-8"
    return response


class RecordingSession(requests.Session):
    """Session that never touches the network.

    Queue responses (or exceptions) with :meth:`queue`; each call pops one.
    """

    def __init__(self):
        super().__init__()
        self.calls: list[dict[str, Any]] = []
        self._replies: list[Any] = []

    def queue(self, *replies: Any) -> "RecordingSession":
        self._replies.extend(replies)
        return self

    def request(self, method, url, **kwargs):  # type: ignore[override]
        self.calls.append({"method": method, "url": url, **kwargs})
        reply = self._replies.pop(0) if self._replies else json_response(200, None)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def http_session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def test_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> TestConfig:
    monkeypatch.setenv("SPENDTRACK_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("SPENDTRACK_API_URL", "http://testserver")
    monkeypatch.delenv("SPENDTRACK_PAGE_SIZE", raising=False)
    monkeypatch.delenv("SPENDTRACK_API_TIMEOUT", raising=False)
    return TestConfig()


@pytest.fixture
def api_client(http_session: RecordingSession) -> ApiClient:
    return ApiClient("http://testserver/api", timeout=5.0, session=http_session)
