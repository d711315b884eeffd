"""Navigation and routing for the Flet app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

from ..errors import AuthenticationError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

ViewBuilder = Callable[["AppContext", ft.Page], ft.View]

PUBLIC_ROUTES = {"/login", "/signup", "/forgot-password", "/reset-password"}
DEFAULT_ROUTE = "/dashboard"


class Router:
    """Maps routes to view builders and guards the signed-in area."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        route = (e.route or "/").split("?", 1)[0] or "/"
        logger.info(f"Route change requested: {route}", extra={"user": self.context.username})

        if route not in PUBLIC_ROUTES and not self.context.signed_in:
            logger.warning("Route blocked - user not logged in")
            self.page.go("/login")
            return

        if route not in self.routes:
            logger.warning(f"Route not in registered routes: {route}, defaulting to dashboard")
            route = DEFAULT_ROUTE

        builder = self.routes[route]
        try:
            view = builder(self.context, self.page)
        except AuthenticationError:
            logger.info("Session expired while loading view", extra={"route": route})
            self.context.sign_out()
            self.page.go("/login")
            return

        if self.page.views:
            self.page.views[-1] = view
        else:
            self.page.views.append(view)
        self.page.update()
        logger.info(f"Loaded view for route: {route}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
            self.page.go(self.page.views[-1].route)
            return
        self.page.go(DEFAULT_ROUTE)
