"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft
import requests

from ..config import BaseConfig
from ..infra.api import ApiClient
from ..infra.repositories import (
    ApiCategoryRepository,
    ApiExpenseRepository,
    ApiIncomeRepository,
)
from ..services.auth import AuthService


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig

    # HTTP session shared by every client so the auth cookie travels everywhere
    http_session: requests.Session
    api: ApiClient
    auth: AuthService

    # Repositories
    expense_repo: ApiExpenseRepository
    income_repo: ApiIncomeRepository
    category_repo: ApiCategoryRepository

    page: Optional[ft.Page] = None
    username: Optional[str] = None

    # Edit target handed from a list screen to its form: {"kind", "id", "return_route"}
    pending_edit: Optional[dict] = None

    @property
    def dev_mode(self) -> bool:
        return bool(self.config.DEV_MODE)

    @property
    def signed_in(self) -> bool:
        return self.username is not None

    def sign_out(self) -> None:
        self.username = None
        self.pending_edit = None
        self.http_session.cookies.clear()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    http_session: Optional[requests.Session] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()
    session = http_session or requests.Session()

    api = ApiClient.from_config(config, session=session)
    auth_client = ApiClient.from_config(config, session=session, root=True)

    return AppContext(
        config=config,
        http_session=session,
        api=api,
        auth=AuthService(auth_client),
        expense_repo=ApiExpenseRepository(api),
        income_repo=ApiIncomeRepository(api),
        category_repo=ApiCategoryRepository(api),
    )
