"""Signup and password recovery views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from urllib.parse import parse_qs, urlparse

import flet as ft

from ...errors import ServiceError
from ...logging_config import get_logger
from ...services.auth import GENDERS
from ..components import show_snack

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext

logger = get_logger(__name__)


def _centered(route: str, title: str, subtitle: str, body: list[ft.Control]) -> ft.View:
    return ft.View(
        route=route,
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text(title, size=28, weight=ft.FontWeight.BOLD),
                        ft.Text(subtitle, color=ft.Colors.ON_SURFACE_VARIANT),
                        *body,
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=12,
                    scroll=ft.ScrollMode.AUTO,
                ),
                alignment=ft.alignment.center,
                expand=True,
                padding=20,
            )
        ],
        padding=0,
    )


def _status_setter(page: ft.Page, status: ft.Text):
    def _set(message: str, *, error: bool = True) -> None:
        status.value = message
        status.color = ft.Colors.ERROR if error else ft.Colors.GREEN
        status.visible = True
        page.update()

    return _set


def build_signup_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Registration form; on success the user is sent back to login."""

    fields = {
        "firstName": ft.TextField(label="First Name", width=300),
        "lastName": ft.TextField(label="Last Name", width=300),
        "email": ft.TextField(label="Email", width=300, keyboard_type=ft.KeyboardType.EMAIL),
        "username": ft.TextField(label="Username", width=300),
        "dateOfBirth": ft.TextField(label="Date of Birth", hint_text="YYYY-MM-DD", width=300),
        "phone": ft.TextField(label="Phone", width=300, keyboard_type=ft.KeyboardType.PHONE),
        "password": ft.TextField(label="Password", password=True, can_reveal_password=True, width=300),
    }
    gender_field = ft.Dropdown(
        label="Gender",
        width=300,
        options=[ft.dropdown.Option(g, g.title()) for g in GENDERS],
    )
    confirm_field = ft.TextField(
        label="Confirm Password", password=True, can_reveal_password=True, width=300
    )
    status = ft.Text("", visible=False)
    show_status = _status_setter(page, status)

    def do_signup(_e):
        status.visible = False
        data = {name: (field.value or "").strip() for name, field in fields.items()}
        data["password"] = fields["password"].value or ""
        if gender_field.value:
            data["gender"] = gender_field.value
        if data["password"] != (confirm_field.value or ""):
            show_status("Passwords do not match.")
            return
        try:
            ctx.auth.signup({name: value for name, value in data.items() if value})
        except ValueError as exc:
            show_status(str(exc))
            return
        except ServiceError as exc:
            logger.info("Signup rejected", extra={"username": data["username"], "status": exc.status_code})
            show_status(exc.message)
            return
        logger.info("Signup succeeded", extra={"username": data["username"]})
        show_snack(page, "Account created. Please log in.")
        page.go("/login")

    return _centered(
        "/signup",
        "Create an account",
        "Start tracking your spending",
        [
            fields["firstName"],
            fields["lastName"],
            fields["email"],
            fields["username"],
            fields["dateOfBirth"],
            gender_field,
            fields["phone"],
            fields["password"],
            confirm_field,
            status,
            ft.FilledButton("Sign Up", on_click=do_signup, width=300),
            ft.TextButton("Already have an account? Login", on_click=lambda _: page.go("/login")),
        ],
    )


def build_forgot_password_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Request a password reset email."""

    email_field = ft.TextField(label="Email", width=300, keyboard_type=ft.KeyboardType.EMAIL)
    status = ft.Text("", visible=False)
    show_status = _status_setter(page, status)

    def do_request(_e):
        status.visible = False
        try:
            reply = ctx.auth.forgot_password(email_field.value or "")
        except ValueError as exc:
            show_status(str(exc))
            return
        except ServiceError as exc:
            show_status(exc.message)
            return
        message = reply if isinstance(reply, str) and reply.strip() else "Reset link sent. Check your email."
        show_status(message.strip(), error=False)

    email_field.on_submit = do_request

    return _centered(
        "/forgot-password",
        "Forgot password",
        "We will email you a reset link",
        [
            email_field,
            status,
            ft.FilledButton("Send Reset Link", on_click=do_request, width=300),
            ft.TextButton("Back to login", on_click=lambda _: page.go("/login")),
        ],
    )


def _token_from_route(route: Optional[str]) -> str:
    values = parse_qs(urlparse(route or "").query).get("token")
    return values[0] if values else ""


def build_reset_password_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Set a new password with the token from the reset email."""

    token_field = ft.TextField(label="Reset Token", width=300, value=_token_from_route(page.route))
    password_field = ft.TextField(label="New Password", password=True, can_reveal_password=True, width=300)
    confirm_field = ft.TextField(label="Confirm Password", password=True, can_reveal_password=True, width=300)
    status = ft.Text("", visible=False)
    show_status = _status_setter(page, status)

    def do_reset(_e):
        status.visible = False
        if (password_field.value or "") != (confirm_field.value or ""):
            show_status("Passwords do not match.")
            return
        try:
            ctx.auth.reset_password(token_field.value or "", password_field.value or "")
        except ValueError as exc:
            show_status(str(exc))
            return
        except ServiceError as exc:
            show_status(exc.message)
            return
        show_snack(page, "Password reset. Please log in.")
        page.go("/login")

    return _centered(
        "/reset-password",
        "Reset password",
        "Choose a new password",
        [
            token_field,
            password_field,
            confirm_field,
            status,
            ft.FilledButton("Reset Password", on_click=do_reset, width=300),
            ft.TextButton("Back to login", on_click=lambda _: page.go("/login")),
        ],
    )
