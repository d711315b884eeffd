"""Authentication calls against the API root."""

from __future__ import annotations

from typing import Any, Mapping

from ..infra.api import ApiClient
from ..logging_config import get_logger

logger = get_logger(__name__)

SIGNUP_FIELDS = (
    "firstName",
    "lastName",
    "email",
    "username",
    "dateOfBirth",
    "gender",
    "phone",
    "password",
)
GENDERS = ("male", "female", "other")


class AuthService:
    """Login/signup/logout and password recovery.

    The server answers ``/login`` with a session cookie; it lands in the shared
    ``requests.Session`` and is replayed by every other client on that session.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, username: str, password: str) -> Any:
        username = username.strip()
        if not username or not password:
            raise ValueError("Username and password are required")
        logger.info("Login attempt", extra={"username": username})
        return self.client.post("/login", {"username": username, "password": password})

    def signup(self, user_data: Mapping[str, Any]) -> Any:
        missing = [name for name in ("email", "username", "password") if not user_data.get(name)]
        if missing:
            raise ValueError(f"Missing required signup fields: {', '.join(missing)}")
        gender = user_data.get("gender")
        if gender and gender not in GENDERS:
            raise ValueError(f"Unknown gender: {gender}")
        payload = {name: user_data[name] for name in SIGNUP_FIELDS if name in user_data}
        logger.info("Signup attempt", extra={"username": user_data["username"]})
        return self.client.post("/signup", payload)

    def logout(self) -> Any:
        result = self.client.post("/logout")
        self.client.session.cookies.clear()
        return result

    def profile(self) -> Any:
        """Return the signed-in user's profile (``username`` etc.)."""
        return self.client.get("/dashboard/profile")

    def forgot_password(self, email: str) -> Any:
        email = (email or "").strip()
        if not email:
            raise ValueError("Email is required")
        return self.client.post("/forgot-password", {"email": email})

    def reset_password(self, token: str, new_password: str) -> Any:
        token = (token or "").strip()
        if not token or not new_password:
            raise ValueError("Reset token and new password are required")
        return self.client.post("/reset-password", {"token": token, "newPassword": new_password})

    @property
    def is_authenticated(self) -> bool:
        return bool(self.client.session.cookies)
