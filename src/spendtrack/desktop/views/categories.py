"""Expense category list with add, edit and delete."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import flet as ft

from ...errors import ServiceError
from ...logging_config import get_logger
from ...models.category import Category
from ..components import build_app_bar, show_confirm_dialog, show_snack

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def build_categories_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """List expense categories; rows are removed only after the server confirms."""

    categories: list[Category] = []
    table = ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Name")),
            ft.DataColumn(ft.Text("Description")),
            ft.DataColumn(ft.Text("Created")),
            ft.DataColumn(ft.Text("Edit")),
            ft.DataColumn(ft.Text("Actions")),
        ],
        rows=[],
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def _render() -> None:
        rows = [
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(c.name)),
                    ft.DataCell(ft.Text(c.description or "")),
                    ft.DataCell(ft.Text(c.created_at.strftime("%Y-%m-%d") if c.created_at else "N/A")),
                    ft.DataCell(
                        ft.IconButton(
                            icon=ft.Icons.EDIT,
                            tooltip="Edit",
                            data=c.id,
                            on_click=lambda _, category_id=c.id: _open_form(category_id),
                        )
                    ),
                    ft.DataCell(
                        ft.IconButton(
                            icon=ft.Icons.DELETE_OUTLINE,
                            icon_color=ft.Colors.RED,
                            tooltip="Delete",
                            data=c.id,
                            on_click=lambda _, category_id=c.id: delete_category(category_id),
                        )
                    ),
                ]
            )
            for c in categories
        ]
        if not rows:
            rows = [ft.DataRow(cells=[ft.DataCell(ft.Text("No categories found."))] + [ft.DataCell(ft.Text("")) for _ in range(4)])]
        table.rows = rows
        page.update()

    def _load() -> None:
        nonlocal categories
        try:
            categories = ctx.category_repo.list_all()
            error_text.visible = False
        except ServiceError as exc:
            logger.warning("Category fetch failed", extra={"error": exc.message})
            error_text.value = exc.message
            error_text.visible = True
        _render()

    def _open_form(category_id: Any = None) -> None:
        if category_id is None:
            ctx.pending_edit = None
        else:
            ctx.pending_edit = {"kind": "category", "id": category_id, "return_route": "/categories"}
        page.go("/categories/form")

    def delete_category(category_id: Any) -> None:
        def _confirm() -> None:
            nonlocal categories
            try:
                ctx.category_repo.delete(category_id)
            except ServiceError as exc:
                logger.warning("Category delete failed", extra={"category_id": category_id, "error": exc.message})
                show_snack(page, f"Delete failed: {exc.message}")
                return
            categories = [c for c in categories if c.id != category_id]
            _render()
            show_snack(page, "Category deleted")

        show_confirm_dialog(page, "Delete category", "Are you sure you want to delete this category?", _confirm)

    add_button = ft.FilledButton("Add Category", icon=ft.Icons.ADD, on_click=lambda _: _open_form())
    _load()

    return ft.View(
        route="/categories",
        appbar=build_app_bar(ctx, "Expense Categories", page),
        controls=[ft.Container(content=ft.Column(controls=[error_text, add_button, table], spacing=16), padding=20)],
        padding=0,
    )
