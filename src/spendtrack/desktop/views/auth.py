"""Login view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import flet as ft

from ...errors import ServiceError
from ...logging_config import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)


def _profile_username(ctx: AppContext) -> Optional[str]:
    """Display name from ``/dashboard/profile``; ``None`` when the lookup fails."""

    try:
        profile = ctx.auth.profile()
    except ServiceError as exc:
        logger.warning("Profile lookup failed", extra={"error": exc.message})
        return None
    if isinstance(profile, dict):
        name = profile.get("username")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return None


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build login view with username and password fields."""

    if ctx.signed_in:
        page.go("/dashboard")
        return ft.View(
            route="/login",
            controls=[ft.Container(content=ft.Text("Redirecting..."), padding=20)],
            padding=0,
        )

    username_field = ft.TextField(label="Username", autofocus=True, width=300)
    password_field = ft.TextField(
        label="Password",
        password=True,
        can_reveal_password=True,
        width=300,
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    def do_login(_e):
        error_text.visible = False
        username = (username_field.value or "").strip()
        try:
            ctx.auth.login(username, password_field.value or "")
        except ValueError as exc:
            _show_error(str(exc))
            return
        except ServiceError as exc:
            logger.info("Login rejected", extra={"username": username, "status": exc.status_code})
            _show_error(exc.message)
            return
        ctx.username = _profile_username(ctx) or username
        logger.info("Login succeeded", extra={"username": ctx.username})
        page.go("/dashboard")

    password_field.on_submit = do_login

    return ft.View(
        route="/login",
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("SpendTrack", size=32, weight=ft.FontWeight.BOLD),
                        ft.Text("Sign in to continue", color=ft.Colors.ON_SURFACE_VARIANT),
                        username_field,
                        password_field,
                        error_text,
                        ft.FilledButton("Login", on_click=do_login, width=300),
                        ft.Row(
                            controls=[
                                ft.TextButton("Create account", on_click=lambda _: page.go("/signup")),
                                ft.TextButton("Forgot password?", on_click=lambda _: page.go("/forgot-password")),
                            ],
                            alignment=ft.MainAxisAlignment.CENTER,
                        ),
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=16,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=0,
    )
