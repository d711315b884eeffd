"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..logging_config import setup_logging
from ..services.list_view import use_system_collation
from .context import create_app_context
from .navigation import Router
from .views.account import build_forgot_password_view, build_reset_password_view, build_signup_view
from .views.auth import build_auth_view
from .views.categories import build_categories_view
from .views.dashboard import build_dashboard_view
from .views.forms import build_category_form_view, build_expense_form_view, build_income_form_view
from .views.records import build_expenses_view, build_income_view

ROUTES = {
    "/login": build_auth_view,
    "/signup": build_signup_view,
    "/forgot-password": build_forgot_password_view,
    "/reset-password": build_reset_password_view,
    "/": build_dashboard_view,
    "/dashboard": build_dashboard_view,
    "/expenses": build_expenses_view,
    "/expenses/form": build_expense_form_view,
    "/income": build_income_view,
    "/income/form": build_income_form_view,
    "/categories": build_categories_view,
    "/categories/form": build_category_form_view,
}


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()
    logger = setup_logging(ctx.config)
    logger.info("SpendTrack desktop application starting")
    use_system_collation()

    ctx.page = page
    page.title = "SpendTrack (DEV)" if ctx.dev_mode else "SpendTrack"
    page.theme_mode = ft.ThemeMode.LIGHT
    page.padding = 0
    page.window_width = 1280
    page.window_height = 800

    router = Router(page, ctx)
    for route, builder in ROUTES.items():
        router.register(route, builder)
    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    page.go("/login")


def run() -> None:
    """Console-script entry point."""
    ft.app(target=main)


if __name__ == "__main__":
    run()
