"""Service module exports."""

from . import auth, dashboard, forms, list_view, screens

__all__ = [
    "auth",
    "dashboard",
    "forms",
    "list_view",
    "screens",
]
