"""Thin JSON client over a cookie-carrying ``requests`` session."""

from __future__ import annotations

import json as jsonlib
from typing import Any, Mapping, Optional

import requests

from ..config import BaseConfig
from ..errors import ApiUnavailableError, AuthenticationError, NotFoundError, ServiceError
from ..logging_config import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "An unexpected error occurred while contacting the server."


def _is_text(response: requests.Response) -> bool:
    return response.headers.get("Content-Type", "").startswith("text/plain")


def _server_message(response: requests.Response) -> Optional[str]:
    """Pull the ``message`` field out of an error body, if there is one.

    The password endpoints answer with a bare ``text/plain`` message instead.
    """

    if _is_text(response):
        return response.text.strip() or None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def error_from_response(response: requests.Response) -> ServiceError:
    """Map a non-2xx response to the matching ``ServiceError`` subclass."""

    status = response.status_code
    message = _server_message(response) or f"Request failed with status code {status}"
    if status in (401, 403):
        return AuthenticationError(message, status_code=status)
    if status == 404:
        return NotFoundError(message, status_code=status)
    return ServiceError(message, status_code=status)


class ApiClient:
    """JSON-over-HTTP client bound to one base URL.

    Several clients may share a ``requests.Session`` so that the auth cookie set
    by ``/login`` is sent with every ``/api`` call.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: BaseConfig,
        *,
        session: Optional[requests.Session] = None,
        root: bool = False,
    ) -> "ApiClient":
        """Build a client for the ``/api`` resources, or the API root when ``root``."""

        base_url = config.API_URL if root else config.api_base_url
        return cls(base_url, timeout=config.API_TIMEOUT, session=session)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, json: Any = None, files: Any = None) -> Any:
        """Send a request and return the decoded body.

        JSON bodies are decoded, ``text/*`` bodies come back as ``str`` and an
        empty body is ``None``.
        """

        url = self.url_for(path)
        try:
            response = self.session.request(
                method, url, json=json, files=files, timeout=self.timeout
            )
        except requests.Timeout as exc:
            logger.warning("API request timed out", extra={"method": method, "url": url})
            raise ApiUnavailableError(f"Request timed out after {self.timeout:g}s") from exc
        except requests.RequestException as exc:
            logger.warning(
                "API request failed", extra={"method": method, "url": url, "error": str(exc)}
            )
            raise ApiUnavailableError(str(exc) or GENERIC_ERROR) from exc

        if not response.ok:
            error = error_from_response(response)
            logger.info(
                "API returned an error",
                extra={"method": method, "url": url, "status": response.status_code},
            )
            raise error

        if not response.content:
            return None
        if _is_text(response):
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError("Server returned a malformed response", status_code=response.status_code) from exc

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload)

    def post_multipart(self, path: str, parts: Mapping[str, Any]) -> Any:
        """POST a ``multipart/form-data`` body with one JSON document per part."""

        files = {
            name: (None, jsonlib.dumps(value), "application/json")
            for name, value in parts.items()
        }
        return self.request("POST", path, files=files)

    def put(self, path: str, payload: Any = None) -> Any:
        return self.request("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
