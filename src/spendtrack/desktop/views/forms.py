"""Create and edit forms for expenses, income and categories.

A list screen that wants to edit a row stores ``{"kind": ..., "id": ...}`` on
``ctx.pending_edit`` and navigates to the form route; without a pending edit
the form creates a new entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

import flet as ft

from ...errors import ServiceError
from ...logging_config import get_logger
from ...models.category import Category
from ...models.record import LedgerRecord
from ...services import forms
from ..components import build_app_bar, show_snack

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

SaveRecord = Callable[..., Any]


@dataclass(frozen=True)
class RecordForm:
    """Static description of one record form."""

    kind: str
    noun: str
    route: str
    list_route: str
    text_label: str
    text_attr: str
    text_hint: str


EXPENSE_FORM = RecordForm(
    kind="expense",
    noun="Expense",
    route="/expenses/form",
    list_route="/expenses",
    text_label="Description",
    text_attr="description",
    text_hint="What was it for?",
)

INCOME_FORM = RecordForm(
    kind="income",
    noun="Income",
    route="/income/form",
    list_route="/income",
    text_label="Source",
    text_attr="source",
    text_hint="Where did it come from?",
)

CATEGORY_FORM_ROUTE = "/categories/form"


def _pending_id(ctx: AppContext, kind: str) -> Any:
    pending = ctx.pending_edit or {}
    if pending.get("kind") != kind:
        return None
    return pending.get("id")


def _form_view(ctx: AppContext, page: ft.Page, route: str, title: str, body: list[ft.Control]) -> ft.View:
    return ft.View(
        route=route,
        appbar=build_app_bar(ctx, title, page),
        controls=[
            ft.Container(
                content=ft.Column(controls=body, spacing=16, width=420),
                padding=20,
            )
        ],
        padding=0,
    )


def build_record_form_view(
    ctx: AppContext,
    page: ft.Page,
    form: RecordForm,
    repository: Any,
    save: SaveRecord,
) -> ft.View:
    """Build the add/edit form for one record kind."""

    existing_id = _pending_id(ctx, form.kind)
    categories: list[Category] = []

    text_field = ft.TextField(label=form.text_label, hint_text=form.text_hint, autofocus=True)
    amount_field = ft.TextField(label="Amount", hint_text="0.00", keyboard_type=ft.KeyboardType.NUMBER)
    category_field = ft.Dropdown(label="Category", options=[])
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    try:
        categories = repository.list_categories()
    except ServiceError as exc:
        logger.warning("Form category fetch failed", extra={"kind": form.kind, "error": exc.message})
        error_text.value = "Failed to fetch categories"
        error_text.visible = True
    category_field.options = [ft.dropdown.Option(str(c.id), c.name) for c in categories]

    if existing_id is not None:
        try:
            record: Optional[LedgerRecord] = repository.get_by_id(existing_id)
        except ServiceError as exc:
            logger.warning("Record lookup failed", extra={"kind": form.kind, "record_id": existing_id})
            error_text.value = exc.message
            error_text.visible = True
            record = None
        if record is not None:
            text_field.value = getattr(record, form.text_attr)
            amount_field.value = "" if record.amount is None else f"{record.amount:g}"
            if record.category is not None and record.category.id is not None:
                category_field.value = str(record.category.id)

    def _selected_category() -> Optional[Category]:
        selected = category_field.value
        if selected is None:
            return None
        return next((c for c in categories if str(c.id) == str(selected)), None)

    def _save(_e) -> None:
        error_text.visible = False
        try:
            draft = forms.build_draft(
                text_field.value,
                amount_field.value,
                _selected_category(),
                text_label=form.text_label,
            )
        except ValueError as exc:
            _show_error(str(exc))
            return
        try:
            save(repository, draft, existing_id=existing_id)
        except ServiceError as exc:
            logger.info("Record save rejected", extra={"kind": form.kind, "status": exc.status_code})
            _show_error(exc.message)
            return
        ctx.pending_edit = None
        show_snack(page, f"{form.noun} {'updated' if existing_id is not None else 'created'}")
        page.go(form.list_route)

    def _cancel(_e) -> None:
        ctx.pending_edit = None
        page.go(form.list_route)

    title = f"{'Edit' if existing_id is not None else 'Add'} {form.noun}"
    return _form_view(
        ctx,
        page,
        form.route,
        title,
        [
            error_text,
            text_field,
            amount_field,
            category_field,
            ft.Row(
                controls=[
                    ft.FilledButton("Save", on_click=_save),
                    ft.OutlinedButton("Cancel", on_click=_cancel),
                ]
            ),
        ],
    )


def build_expense_form_view(ctx: AppContext, page: ft.Page) -> ft.View:
    return build_record_form_view(ctx, page, EXPENSE_FORM, ctx.expense_repo, forms.save_expense)


def build_income_form_view(ctx: AppContext, page: ft.Page) -> ft.View:
    return build_record_form_view(ctx, page, INCOME_FORM, ctx.income_repo, forms.save_income)


def build_category_form_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Add or edit an expense category."""

    existing_id = _pending_id(ctx, "category")
    name_field = ft.TextField(label="Category Name", autofocus=True)
    description_field = ft.TextField(label="Description", multiline=True, min_lines=2)
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    if existing_id is not None:
        try:
            existing = next(
                (c for c in ctx.category_repo.list_all() if str(c.id) == str(existing_id)), None
            )
        except ServiceError as exc:
            logger.warning("Category lookup failed", extra={"category_id": existing_id})
            error_text.value = exc.message
            error_text.visible = True
            existing = None
        if existing is not None:
            name_field.value = existing.name
            description_field.value = existing.description

    def _save(_e) -> None:
        error_text.visible = False
        try:
            forms.save_category(
                ctx.category_repo,
                name_field.value,
                description_field.value,
                existing_id=existing_id,
            )
        except ValueError as exc:
            _show_error(str(exc))
            return
        except ServiceError as exc:
            logger.info("Category save rejected", extra={"status": exc.status_code})
            _show_error(exc.message)
            return
        ctx.pending_edit = None
        show_snack(page, f"Category {'updated' if existing_id is not None else 'created'}")
        page.go("/categories")

    def _cancel(_e) -> None:
        ctx.pending_edit = None
        page.go("/categories")

    title = "Edit Category" if existing_id is not None else "Add Category"
    return _form_view(
        ctx,
        page,
        CATEGORY_FORM_ROUTE,
        title,
        [
            error_text,
            name_field,
            description_field,
            ft.Row(
                controls=[
                    ft.FilledButton("Save", on_click=_save),
                    ft.OutlinedButton("Cancel", on_click=_cancel),
                ]
            ),
        ],
    )
