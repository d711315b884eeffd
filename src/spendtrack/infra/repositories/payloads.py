"""Translate the API's camelCase JSON into model instances."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ...errors import ServiceError
from ...models.category import Category
from ...models.record import Expense, Income


class PayloadError(ServiceError):
    """The server answered 2xx but the body does not look like we expect."""


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Accept ISO strings or ``[y, m, d, h?, mi?, s?, ...]`` arrays.

    Results are always naive. Offsets are converted to UTC first so values
    from both encodings can be compared.
    """

    if raw is None or raw == "":
        return None
    if isinstance(raw, (list, tuple)):
        if len(raw) < 3:
            raise ValueError(f"timestamp array needs at least year, month, day: {raw!r}")
        parts = [int(p) for p in raw[:6]]
        return datetime(*parts)
    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    raise ValueError(f"unsupported timestamp value: {raw!r}")


def _amount(raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    return float(raw)


def parse_category(payload: Mapping[str, Any]) -> Category:
    return Category(
        id=payload["id"],
        name=payload.get("categoryName") or payload.get("name") or "",
        description=payload.get("description") or "",
        created_at=parse_timestamp(payload.get("createdAt")),
    )


def _embedded_category(payload: Mapping[str, Any]) -> Optional[Category]:
    raw = payload.get("category")
    if not raw:
        return None
    return parse_category(raw)


def parse_expense(payload: Mapping[str, Any]) -> Expense:
    return Expense(
        id=payload["id"],
        description=payload.get("description") or "",
        amount=_amount(payload.get("amount")),
        created_at=parse_timestamp(payload.get("createdAt")),
        category=_embedded_category(payload),
        file_url=payload.get("fileUrl") or None,
    )


def parse_income(payload: Mapping[str, Any]) -> Income:
    return Income(
        id=payload["id"],
        source=payload.get("source") or "",
        amount=_amount(payload.get("amount")),
        created_at=parse_timestamp(payload.get("createdAt")),
        category=_embedded_category(payload),
    )


def parse_many(payload: Any, parser, *, resource: str) -> list:
    """Apply ``parser`` to every item of a JSON list, failing as a whole."""

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise PayloadError(f"Expected a list of {resource}, got {type(payload).__name__}")
    try:
        return [parser(item) for item in payload]
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise PayloadError(f"Malformed {resource} payload: {exc}") from exc


def parse_one(payload: Any, parser, *, resource: str):
    """Apply ``parser`` to a single JSON object."""

    if not isinstance(payload, Mapping):
        raise PayloadError(f"Expected a {resource} object, got {type(payload).__name__}")
    try:
        return parser(payload)
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise PayloadError(f"Malformed {resource} payload: {exc}") from exc


def parse_created(payload: Any, parser, *, resource: str):
    """Parse the body of a create/update call; servers may answer with no body."""

    if payload is None or isinstance(payload, str):
        return None
    return parse_one(payload, parser, resource=resource)


def category_body(category: Category) -> dict[str, Any]:
    body: dict[str, Any] = {"categoryName": category.name, "description": category.description}
    if category.id is not None:
        body["id"] = category.id
    return body


def _category_ref(category: Optional[Category]) -> Optional[dict[str, Any]]:
    return {"id": category.id} if category else None


def expense_body(expense: Expense) -> dict[str, Any]:
    return {
        "description": expense.description,
        "amount": expense.amount,
        "category": _category_ref(expense.category),
    }


def income_body(income: Income) -> dict[str, Any]:
    # The income endpoints want the whole category, not just its id.
    category = income.category
    return {
        "source": income.source,
        "amount": income.amount,
        "category": None
        if category is None
        else {
            "id": category.id,
            "categoryName": category.name,
            "description": category.description,
            "createdAt": category.created_at.isoformat() if category.created_at else None,
        },
    }
