"""Dashboard with income/expense totals and top spending categories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...errors import AuthenticationError, ServiceError
from ...logging_config import get_logger
from ...services import dashboard
from ..components import build_app_bar, format_currency

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def _summary_card(label: str, value: float, color: str) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Text(label, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(format_currency(value), size=24, weight=ft.FontWeight.BOLD, color=color),
            ],
            spacing=4,
        ),
        padding=16,
        border_radius=8,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        width=220,
    )


def build_dashboard_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the landing page shown after login."""

    body: list[ft.Control] = []
    try:
        expenses = ctx.expense_repo.list_all()
        incomes = ctx.income_repo.list_all()
    except AuthenticationError:
        logger.info("Dashboard requires login, redirecting")
        ctx.sign_out()
        page.go("/login")
        return ft.View(route="/dashboard", controls=[ft.Text("Redirecting...")], padding=20)
    except ServiceError as exc:
        logger.warning("Dashboard fetch failed", extra={"error": exc.message})
        body.append(ft.Text("Failed to fetch dashboard data.", color=ft.Colors.ERROR))
        body.append(ft.Text(exc.message, color=ft.Colors.ON_SURFACE_VARIANT))
    else:
        totals = dashboard.compute_summary(expenses, incomes)
        body.append(
            ft.Row(
                controls=[
                    _summary_card("Income", totals["income"], ft.Colors.GREEN),
                    _summary_card("Expenses", totals["expenses"], ft.Colors.RED),
                    _summary_card("Net", totals["net"], ft.Colors.PRIMARY),
                ],
                spacing=16,
                wrap=True,
            )
        )
        breakdown = dashboard.top_categories(dashboard.compute_spending_by_category(expenses))
        body.append(ft.Text("Expense Overview", size=18, weight=ft.FontWeight.BOLD))
        if not breakdown:
            body.append(ft.Text("No data available"))
        for item in breakdown:
            share = (float(item["amount"]) / totals["expenses"] * 100) if totals["expenses"] else 0.0
            body.append(
                ft.Row(
                    controls=[
                        ft.Text(str(item["name"]), weight=ft.FontWeight.BOLD),
                        ft.Text(f"{format_currency(float(item['amount']))} - {share:.1f}%"),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                )
            )

    greeting = f"Welcome, {ctx.username}" if ctx.username else "Welcome to Your Dashboard"
    return ft.View(
        route="/dashboard",
        appbar=build_app_bar(ctx, "Dashboard", page),
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[ft.Text(greeting, size=22, weight=ft.FontWeight.BOLD), *body],
                    spacing=16,
                ),
                padding=20,
            )
        ],
        padding=0,
    )
