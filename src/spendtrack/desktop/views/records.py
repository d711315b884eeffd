"""Expenses and Income register screens.

Both screens are the same view over a :class:`ListViewController`; only the
columns, the free-text field and the repository differ.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

import flet as ft

from ...logging_config import get_logger
from ...models.record import Expense, LedgerRecord
from ...services.list_view import ALL_CATEGORIES, ASCENDING, DESCENDING, ListViewController
from ...services import screens
from ..components import build_app_bar, format_currency, show_confirm_dialog, show_snack

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

Column = tuple[str, Callable[[Any], ft.Control]]


@dataclass(frozen=True)
class ScreenLayout:
    """Static description of one register screen."""

    title: str
    route: str
    kind: str
    form_route: str
    noun: str
    text_field: str
    text_hint: str
    sort_labels: Mapping[str, str]
    columns: Sequence[Column]


def _date_text(record: LedgerRecord, fmt: str) -> ft.Control:
    return ft.Text(record.created_at.strftime(fmt) if record.created_at else "N/A")


def _file_cell(api_root: str) -> Callable[[Expense], ft.Control]:
    def build(expense: Expense) -> ft.Control:
        if not expense.file_url:
            return ft.Text("No File")
        return ft.TextButton("Download", url=f"{api_root}/{expense.file_url.lstrip('/')}")

    return build


def expense_screen(api_root: str) -> ScreenLayout:
    return ScreenLayout(
        title="Expenses",
        route="/expenses",
        kind="expense",
        form_route="/expenses/form",
        noun="expense",
        text_field="description",
        text_hint="Search by description",
        sort_labels=screens.EXPENSE_SORT_LABELS,
        columns=(
            ("Description", lambda r: ft.Text(r.description)),
            ("Amount", lambda r: ft.Text(format_currency(r.amount))),
            ("Created At", lambda r: _date_text(r, "%Y-%m-%d %H:%M")),
            ("Category", lambda r: ft.Text(r.category_name or "Uncategorized")),
            ("File", _file_cell(api_root)),
        ),
    )


def income_screen() -> ScreenLayout:
    return ScreenLayout(
        title="Income",
        route="/income",
        kind="income",
        form_route="/income/form",
        noun="income entry",
        text_field="source",
        text_hint="Search by source",
        sort_labels=screens.INCOME_SORT_LABELS,
        columns=(
            ("Source", lambda r: ft.Text(r.source)),
            ("Amount", lambda r: ft.Text(format_currency(r.amount))),
            ("Date", lambda r: _date_text(r, "%Y-%m-%d")),
            ("Category", lambda r: ft.Text(r.category_name or "Uncategorized")),
        ),
    )


def parse_min_amount(raw: str | None) -> tuple[float | None, str | None]:
    """Validate the minimum-amount box; returns ``(value, error_text)``."""

    text = (raw or "").strip()
    if not text:
        return None, None
    try:
        value = float(text)
    except ValueError:
        return None, "Enter a number"
    if value < 0:
        return None, "Amount must be positive."
    return value, None


def build_register_view(
    ctx: AppContext,
    page: ft.Page,
    controller: ListViewController,
    screen: ScreenLayout,
) -> ft.View:
    """Build a register screen bound to ``controller`` and load its data."""

    search_field = ft.TextField(label="Search", hint_text=screen.text_hint, width=240)
    category_field = ft.Dropdown(label="Category", width=200, value=ALL_CATEGORIES)
    amount_field = ft.TextField(label="Min amount", hint_text="0.00", width=140)
    date_field = ft.TextField(label="Date", hint_text="YYYY-MM-DD", width=150)
    sort_field = ft.Dropdown(
        label="Sort by",
        width=160,
        options=[ft.dropdown.Option(key, label) for key, label in screen.sort_labels.items()],
        value=controller.sort.field,
    )
    direction_field = ft.Dropdown(
        label="Direction",
        width=150,
        options=[
            ft.dropdown.Option(ASCENDING, "Ascending"),
            ft.dropdown.Option(DESCENDING, "Descending"),
        ],
        value=controller.sort.direction,
    )

    table = ft.DataTable(
        columns=[ft.DataColumn(ft.Text(label)) for label, _ in screen.columns]
        + [ft.DataColumn(ft.Text("Edit")), ft.DataColumn(ft.Text("Actions"))],
        rows=[],
    )
    page_label = ft.Text("Page 1 / 1")
    total_label = ft.Text("")
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
    prev_button = ft.OutlinedButton("Previous", on_click=lambda _: _go_page(-1))
    next_button = ft.OutlinedButton("Next", on_click=lambda _: _go_page(1))

    def _hydrate_categories() -> None:
        options = [ft.dropdown.Option(ALL_CATEGORIES, "All Categories")]
        options += [ft.dropdown.Option(str(c.id), c.name) for c in controller.categories]
        category_field.options = options
        if category_field.page:
            category_field.update()

    def _render() -> None:
        view = controller.view
        rows: list[ft.DataRow] = []
        for record in view.records:
            cells = [ft.DataCell(build(record)) for _, build in screen.columns]
            cells.append(
                ft.DataCell(
                    ft.IconButton(
                        icon=ft.Icons.EDIT,
                        tooltip="Edit",
                        data=record.id,
                        on_click=lambda _, record_id=record.id: _open_form(record_id),
                    )
                )
            )
            cells.append(
                ft.DataCell(
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        icon_color=ft.Colors.RED,
                        tooltip="Delete",
                        data=record.id,
                        on_click=lambda _, record_id=record.id: delete_record(record_id),
                    )
                )
            )
            rows.append(ft.DataRow(cells=cells))
        if not rows:
            rows = [
                ft.DataRow(
                    cells=[ft.DataCell(ft.Text(f"No {screen.title.lower()} found."))]
                    + [ft.DataCell(ft.Text("")) for _ in range(len(screen.columns) + 1)]
                )
            ]
        table.rows = rows

        page_label.value = f"Page {view.page} / {view.last_page}"
        total_label.value = f"{view.total} {screen.title.lower()}"
        prev_button.disabled = not view.has_previous
        next_button.disabled = not view.has_next
        error_text.value = view.error or ""
        error_text.visible = bool(view.error)
        page.update()

    def _apply_filter(name: str, value: Any) -> None:
        controller.set_filter(name, value)
        _render()

    def _on_search(_=None) -> None:
        _apply_filter(screen.text_field, search_field.value or "")

    def _on_category(_=None) -> None:
        category = controller.category_by_id(category_field.value)
        _apply_filter("category", category.name if category else ALL_CATEGORIES)

    def _on_amount(_=None) -> None:
        value, error = parse_min_amount(amount_field.value)
        amount_field.error_text = error
        if error:
            if amount_field.page:
                amount_field.update()
            return
        _apply_filter("amount", value)

    def _on_date(_=None) -> None:
        raw = (date_field.value or "").strip()
        if raw:
            try:
                date.fromisoformat(raw)
            except ValueError:
                date_field.error_text = "Use YYYY-MM-DD"
                if date_field.page:
                    date_field.update()
                return
        date_field.error_text = None
        _apply_filter("date", raw)

    def _on_sort(_=None) -> None:
        controller.set_sort(sort_field.value or controller.sort.field, direction_field.value)
        _render()

    def _go_page(delta: int) -> None:
        controller.set_page(controller.page.current + delta)
        _render()

    def _reset_filters(_=None) -> None:
        search_field.value = ""
        amount_field.value = ""
        amount_field.error_text = None
        date_field.value = ""
        date_field.error_text = None
        category_field.value = ALL_CATEGORIES
        controller.clear_filters()
        _render()

    def _reload(_=None) -> None:
        result = controller.refresh()
        _render()
        if not result.ok:
            show_snack(page, f"Could not load {screen.title.lower()}: {result.error}")

    def _open_form(record_id: Any = None) -> None:
        if record_id is None:
            ctx.pending_edit = None
        else:
            ctx.pending_edit = {"kind": screen.kind, "id": record_id, "return_route": screen.route}
        page.go(screen.form_route)

    def delete_record(record_id: Any) -> None:
        def _confirm() -> None:
            result = controller.delete_record(record_id)
            _render()
            if result.ok:
                show_snack(page, f"Deleted {screen.noun}")
            else:
                show_snack(page, f"Delete failed: {result.error}")

        show_confirm_dialog(
            page, f"Delete {screen.noun}", f"Are you sure you want to delete this {screen.noun}?", _confirm
        )

    search_field.on_change = _on_search
    category_field.on_change = _on_category
    amount_field.on_change = _on_amount
    date_field.on_submit = _on_date
    date_field.on_blur = _on_date
    sort_field.on_change = _on_sort
    direction_field.on_change = _on_sort

    if not controller.load_categories().ok:
        logger.warning("Category filter left empty", extra={"screen": controller.config.name})
    _hydrate_categories()
    _reload()

    filter_bar = ft.Row(
        controls=[
            search_field,
            category_field,
            amount_field,
            date_field,
            sort_field,
            direction_field,
            ft.FilledButton(f"Add {screen.noun.split()[0].title()}", icon=ft.Icons.ADD, on_click=lambda _: _open_form()),
            ft.TextButton("Reset", on_click=_reset_filters),
            ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh", on_click=_reload),
        ],
        wrap=True,
        spacing=12,
    )
    pager = ft.Row(
        controls=[prev_button, page_label, next_button, total_label],
        alignment=ft.MainAxisAlignment.CENTER,
    )

    return ft.View(
        route=screen.route,
        appbar=build_app_bar(ctx, screen.title, page),
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[error_text, filter_bar, table, pager],
                    spacing=16,
                    scroll=ft.ScrollMode.AUTO,
                ),
                padding=20,
                expand=True,
            )
        ],
        padding=0,
    )


def build_expenses_view(ctx: AppContext, page: ft.Page) -> ft.View:
    controller = screens.expense_controller(ctx.expense_repo, page_size=ctx.config.PAGE_SIZE)
    return build_register_view(ctx, page, controller, expense_screen(ctx.config.API_URL))


def build_income_view(ctx: AppContext, page: ft.Page) -> ft.View:
    controller = screens.income_controller(ctx.income_repo, page_size=ctx.config.PAGE_SIZE)
    return build_register_view(ctx, page, controller, income_screen())
