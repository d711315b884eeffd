"""Shared widgets for the desktop views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ..errors import ServiceError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

NAV_LINKS = (
    ("Dashboard", "/dashboard", ft.Icons.DASHBOARD),
    ("Expenses", "/expenses", ft.Icons.RECEIPT_LONG),
    ("Income", "/income", ft.Icons.PAYMENTS),
    ("Categories", "/categories", ft.Icons.CATEGORY),
)


def format_currency(amount: Optional[float]) -> str:
    if amount is None:
        return "-"
    return f"${amount:,.2f}"


def show_snack(page: ft.Page, message: str) -> None:
    """Display a snack bar message."""

    page.snack_bar = ft.SnackBar(content=ft.Text(message), show_close_icon=True)
    page.snack_bar.open = True
    page.update()


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
) -> ft.AlertDialog:
    """Show a Cancel/Confirm dialog; ``on_confirm`` runs after it closes."""

    def handle_confirm(_e):
        dialog.open = False
        page.update()
        on_confirm()

    def handle_cancel(_e):
        dialog.open = False
        page.update()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("Cancel", on_click=handle_cancel),
            ft.FilledButton("Confirm", on_click=handle_confirm),
        ],
    )
    page.dialog = dialog
    dialog.open = True
    page.update()
    return dialog


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """Title plus navigation and logout actions."""

    def _logout(_e):
        try:
            ctx.auth.logout()
        except ServiceError as exc:
            logger.warning("Logout request failed", extra={"error": exc.message})
        ctx.sign_out()
        page.go("/login")

    actions: list[ft.Control] = [
        ft.TextButton(label, icon=icon, on_click=lambda _, route=route: page.go(route))
        for label, route, icon in NAV_LINKS
    ]
    if ctx.username:
        actions.append(ft.Chip(label=ft.Text(ctx.username), leading=ft.Icon(ft.Icons.PERSON)))
    actions.append(ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Logout", on_click=_logout))

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )
