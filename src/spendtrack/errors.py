"""Errors raised by the collaborators that talk to the remote API."""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for failures reported by a remote collaborator.

    ``message`` is meant to be shown to the user as-is.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ServiceError):
    """The session cookie is missing, expired or lacks permission."""


class NotFoundError(ServiceError):
    """The requested entity does not exist on the server."""


class ApiUnavailableError(ServiceError):
    """The API could not be reached (connection refused, DNS, timeout)."""
